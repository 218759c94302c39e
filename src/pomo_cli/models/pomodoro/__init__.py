"""Pomodoro timer: state model, persistence, notifications and the terminal loop."""

from .exceptions import PomoError, StateSaveError, TerminalModeError
from .keyboard import KeyboardHandler
from .notifier import notify_phase_complete, show_notification
from .state import TimerPhase, TimerState
from .storage import TimerStateStore, config_path, load_state, save_state
from .ui import TimerDisplay, TimerLoop, show_stopped_message

__all__ = [
    "TimerPhase",
    "TimerState",
    "TimerStateStore",
    "TimerDisplay",
    "TimerLoop",
    "KeyboardHandler",
    "PomoError",
    "StateSaveError",
    "TerminalModeError",
    "config_path",
    "load_state",
    "save_state",
    "show_notification",
    "notify_phase_complete",
    "show_stopped_message",
]
