"""Terminal timer display and the render/input loop."""

import time
from collections.abc import Callable

from rich.console import Console, Group
from rich.text import Text

from pomo_cli.config import (
    POLL_TIMEOUT_SECONDS,
    SAVE_INTERVAL_SECONDS,
    TICK_SLEEP_SECONDS,
)
from pomo_cli.utils.logger import get_logger

from .keyboard import CTRL_C, KeyboardHandler
from .notifier import notify_phase_complete
from .state import TimerPhase, TimerState
from .storage import TimerStateStore


class TimerDisplay:
    """Draws the timer on a cleared screen each tick."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def clear(self) -> None:
        """Clear the terminal and move the cursor home."""
        self.console.clear(home=True)

    def render(self, state: TimerState) -> Group:
        """Build the frame: time and phase glyph, a blank line, the key hints."""
        if state.is_paused:
            color = "yellow"
        elif state.phase is TimerPhase.BREAK:
            color = "green"
        else:
            color = "cyan"

        timer_text = Text(f"{state.format_time()} {state.emoji()}", style=f"bold {color}")
        return Group(timer_text, Text(""), self._create_footer_text(state.is_paused))

    def _create_footer_text(self, is_paused: bool) -> Text:
        """Create footer with keyboard hints."""
        if is_paused:
            return Text("PAUSED - Press 'r' to resume, 'q' to quit", style="yellow")
        return Text("Press 'p' to pause, 'q' to quit", style="dim")

    def show(self, state: TimerState) -> None:
        self.console.print(self.render(state))


def show_stopped_message(state: TimerState, console: Console | None = None):
    """Show where the timer stopped, after the loop exits."""
    console = console or Console()
    console.print(
        f"[dim]Timer saved at[/dim] [bold]{state.format_time()}[/bold] "
        f"{state.emoji()} [dim]({state.phase.value})[/dim]"
    )


class TimerLoop:
    """
    The single-threaded render/input loop.

    Each ``step()`` runs, in order: clear, advance the countdown, render,
    switch phase if the countdown reached zero, save if the save interval
    has passed, poll the keyboard with a bounded wait, then sleep briefly.
    """

    def __init__(
        self,
        state: TimerState | None = None,
        store: TimerStateStore | None = None,
        display: TimerDisplay | None = None,
        keyboard: KeyboardHandler | None = None,
        notify: Callable[[TimerPhase], None] = notify_phase_complete,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store or TimerStateStore()
        self.state = state if state is not None else self.store.load()
        self.display = display or TimerDisplay()
        self.keyboard = keyboard or KeyboardHandler()
        self.notify = notify
        self.clock = clock
        self.sleep = sleep
        self.last_save = clock()
        self.logger = get_logger(__name__)

    def step(self) -> bool:
        """Run one tick. Returns False once the user asked to quit."""
        self.display.clear()
        self.state.update()
        self.display.show(self.state)

        if self.state.is_finished():
            self._complete_phase()

        if self.clock() - self.last_save >= SAVE_INTERVAL_SECONDS:
            self.store.save(self.state)
            self.last_save = self.clock()

        key = self.keyboard.get_key(POLL_TIMEOUT_SECONDS)
        if not self.handle_key(key):
            return False

        self.sleep(TICK_SLEEP_SECONDS)
        return True

    def handle_key(self, key: str | None) -> bool:
        """Apply a keypress. Returns False for quit keys."""
        if key in ("q", CTRL_C):
            return False
        if key == "p" and not self.state.is_paused:
            self.state.toggle_pause()
            self.logger.info("paused at %s", self.state.format_time())
        elif key == "r" and self.state.is_paused:
            self.state.toggle_pause()
            self.logger.info("resumed at %s", self.state.format_time())
        return True

    def _complete_phase(self) -> None:
        finished = self.state.phase
        self.notify(finished)
        self.state.reset_to(finished.next_phase())
        self.logger.info(
            "%s phase finished, starting %s", finished.value, self.state.phase.value
        )

    def run(self) -> TimerState:
        """
        Run until 'q' or Ctrl+C, then save the final state.

        Terminal settings are restored on every exit path. Errors raised
        inside the loop (e.g. a failed save) propagate after restoration.
        """
        self.logger.info(
            "timer started: %s %s%s",
            self.state.phase.value,
            self.state.format_time(),
            " (paused)" if self.state.is_paused else "",
        )
        try:
            with self.keyboard:
                while self.step():
                    pass
        except KeyboardInterrupt:
            self.logger.info("interrupted")

        self.store.save(self.state)
        self.logger.info(
            "timer stopped: %s %s", self.state.phase.value, self.state.format_time()
        )
        return self.state
