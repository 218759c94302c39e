"""Keyboard input in cbreak mode for the timer loop."""

import os
import select
import sys
import termios
import tty
from typing import Optional

from .exceptions import TerminalModeError

CTRL_C = "\x03"


class KeyboardHandler:
    """
    Non-blocking keyboard input handler.

    Use as a context manager: the terminal is switched to cbreak mode on
    enter and the previous settings are restored on exit, whatever the
    reason for leaving the block.
    """

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin
        self.fd: int | None = None
        self.old_settings = None

    def __enter__(self) -> "KeyboardHandler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        """Save the current terminal settings and enter cbreak mode."""
        try:
            self.fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (OSError, ValueError, termios.error) as e:
            self.old_settings = None
            raise TerminalModeError(f"Failed to enable raw mode: {e}") from e

    def get_key(self, timeout: float = 0.0) -> Optional[str]:
        """
        Wait up to ``timeout`` seconds for a single keypress.

        Returns the key character, or None if no key was pressed in time.
        Bytes outside ASCII (parts of multi-byte characters, stray escape
        payloads) are read one at a time and reported as None.
        """
        fd = self.fd if self.fd is not None else self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, 1)
        if not data or data[0] > 0x7F:
            return None
        return data.decode("ascii")

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.old_settings is None:
            return

        old_settings, self.old_settings = self.old_settings, None
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, old_settings)
        except termios.error as e:
            raise TerminalModeError(f"Failed to disable raw mode: {e}") from e
