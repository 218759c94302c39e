"""Timer state and its transition logic. No I/O happens here."""

import time
from dataclasses import dataclass
from enum import Enum

from pomo_cli.config import (
    BREAK_COMPLETE_MESSAGE,
    BREAK_DURATION_SECONDS,
    WORK_COMPLETE_MESSAGE,
    WORK_DURATION_SECONDS,
)


class TimerPhase(str, Enum):
    """The two mutually exclusive timer modes."""

    WORK = "Work"
    BREAK = "Break"

    @property
    def duration(self) -> int:
        """Fixed countdown length of this phase, in seconds."""
        if self is TimerPhase.WORK:
            return WORK_DURATION_SECONDS
        return BREAK_DURATION_SECONDS

    @property
    def emoji(self) -> str:
        if self is TimerPhase.WORK:
            return "🍅"
        return "🌴"

    @property
    def completion_message(self) -> str:
        """Notification body shown when this phase runs out."""
        if self is TimerPhase.WORK:
            return WORK_COMPLETE_MESSAGE
        return BREAK_COMPLETE_MESSAGE

    def next_phase(self) -> "TimerPhase":
        if self is TimerPhase.WORK:
            return TimerPhase.BREAK
        return TimerPhase.WORK


def _now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


@dataclass
class TimerState:
    """Represents the countdown of the current phase."""

    phase: TimerPhase = TimerPhase.WORK
    remaining_seconds: int = WORK_DURATION_SECONDS
    is_paused: bool = False
    last_update: int | None = None  # Unix timestamp, None until first update()

    @staticmethod
    def work_duration() -> int:
        return TimerPhase.WORK.duration

    @staticmethod
    def break_duration() -> int:
        return TimerPhase.BREAK.duration

    def update(self, now: int | None = None) -> None:
        """
        Advance the countdown by the wall-clock time since the last update.

        The first call after a load or reset deducts nothing. While paused no
        time is deducted, but ``last_update`` still moves forward so that
        resuming does not count the paused interval.
        """
        if now is None:
            now = _now()

        if self.last_update is not None and not self.is_paused:
            elapsed = now - self.last_update
            if elapsed > 0:
                self.remaining_seconds = max(0, self.remaining_seconds - elapsed)

        self.last_update = now

    def is_finished(self) -> bool:
        """Check if the current phase has run out."""
        return self.remaining_seconds == 0

    def toggle_pause(self) -> None:
        self.is_paused = not self.is_paused

    def reset_to(self, phase: TimerPhase) -> None:
        """Start ``phase`` from its full duration, running."""
        self.phase = phase
        self.remaining_seconds = phase.duration
        self.is_paused = False
        # Cleared so the next update() does not deduct the time spent
        # before the reset.
        self.last_update = None

    def reset_to_work(self) -> None:
        self.reset_to(TimerPhase.WORK)

    def reset_to_break(self) -> None:
        self.reset_to(TimerPhase.BREAK)

    def format_time(self) -> str:
        """Render the remaining time as MM:SS."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def emoji(self) -> str:
        return self.phase.emoji

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return {
            "phase": self.phase.value,
            "remaining_seconds": self.remaining_seconds,
            "is_paused": self.is_paused,
            "last_update": self.last_update,
        }
