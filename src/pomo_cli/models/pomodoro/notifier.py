"""Best-effort desktop notifications."""

from plyer import notification

from pomo_cli.config import NOTIFICATION_TITLE
from pomo_cli.utils.logger import get_logger

from .state import TimerPhase


def show_notification(message: str) -> None:
    """Show a desktop notification. Delivery failures are ignored."""
    try:
        notification.notify(title=NOTIFICATION_TITLE, message=message)
    except Exception as e:
        # No notification backend (headless box, missing D-Bus, ...)
        get_logger(__name__).debug("notification not delivered: %s", e)


def notify_phase_complete(phase: TimerPhase) -> None:
    """Announce that ``phase`` has just run out."""
    show_notification(phase.completion_message)
