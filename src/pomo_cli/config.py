"""Fixed settings for the pomo timer.

Durations are not user-configurable; the only environment input is ``HOME``,
used to locate the persisted state file.
"""

import os
import tempfile
from pathlib import Path

WORK_DURATION_SECONDS = 25 * 60
BREAK_DURATION_SECONDS = 5 * 60

# Loop timing
SAVE_INTERVAL_SECONDS = 5.0
POLL_TIMEOUT_SECONDS = 0.1
TICK_SLEEP_SECONDS = 0.1

STATE_FILE_NAME = ".pomo.json"

NOTIFICATION_TITLE = "Pomodoro Timer"
WORK_COMPLETE_MESSAGE = "Work session completed! Time for a break."
BREAK_COMPLETE_MESSAGE = "Break time over! Ready for work?"


def get_home_dir() -> Path:
    """Return $HOME, or the system temp directory when it is unset."""
    home = os.environ.get("HOME")
    if not home:
        return Path(tempfile.gettempdir())
    return Path(home)
