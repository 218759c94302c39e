"""Custom exceptions for the pomo timer."""


class PomoError(Exception):
    """Base exception for all fatal pomo errors."""


class StateSaveError(PomoError):
    """Raised when the timer state cannot be serialized or written to disk."""


class TerminalModeError(PomoError):
    """Raised when the terminal cannot be switched into or out of cbreak mode."""
