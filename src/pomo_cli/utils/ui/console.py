"""Console utilities for pomo."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=highlight)


@lru_cache(maxsize=1)
def get_error_console() -> Console:
    """Get a Rich Console bound to standard error."""
    return Console(stderr=True, highlight=False)
