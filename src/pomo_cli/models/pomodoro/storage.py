"""Timer state persistence in a single JSON file under $HOME."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pomo_cli.config import (
    BREAK_DURATION_SECONDS,
    STATE_FILE_NAME,
    WORK_DURATION_SECONDS,
    get_home_dir,
)
from pomo_cli.utils.logger import get_logger

from .exceptions import StateSaveError
from .state import TimerPhase, TimerState


class PersistedTimerState(BaseModel):
    """Shape of the on-disk state document; wrong JSON types are rejected."""

    model_config = ConfigDict(strict=True)

    phase: TimerPhase
    remaining_seconds: int = Field(
        ge=0, le=max(WORK_DURATION_SECONDS, BREAK_DURATION_SECONDS)
    )
    is_paused: bool
    last_update: int | None = Field(default=None, ge=0)

    def to_state(self) -> TimerState:
        return TimerState(
            phase=self.phase,
            remaining_seconds=self.remaining_seconds,
            is_paused=self.is_paused,
            last_update=self.last_update,
        )


def config_path() -> Path:
    """Location of the state file: ``<home>/.pomo.json``."""
    return get_home_dir() / STATE_FILE_NAME


class TimerStateStore:
    """Loads and saves TimerState snapshots at a fixed path."""

    def __init__(self, path: Path | None = None):
        self.path = path if path is not None else config_path()

    def load(self) -> TimerState:
        """
        Load the saved state, or a fresh default one.

        A missing, unreadable or malformed file is not an error. The loaded
        state is advanced immediately so time spent while the program was
        not running is accounted for.
        """
        logger = get_logger(__name__)
        try:
            contents = self.path.read_text(encoding="utf-8")
            state = PersistedTimerState.model_validate_json(contents).to_state()
        except FileNotFoundError:
            logger.debug("no saved state at %s, starting fresh", self.path)
            return TimerState()
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.debug("ignoring unreadable state file %s: %s", self.path, e)
            return TimerState()

        state.update()
        return state

    def save(self, state: TimerState) -> None:
        """Overwrite the state file with ``state``.

        Raises:
            StateSaveError: if the state cannot be serialized or written.
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            contents = json.dumps(state.to_dict(), indent=2)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(contents)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            raise StateSaveError(f"Failed to save state to {self.path}: {e}") from e

        get_logger(__name__).debug("saved state to %s", self.path)


def load_state() -> TimerState:
    """Load the state from the default location."""
    return TimerStateStore().load()


def save_state(state: TimerState) -> None:
    """Save the state to the default location."""
    TimerStateStore().save(state)
