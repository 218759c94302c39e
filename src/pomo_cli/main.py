"""Main entry point for pomo."""

import typer
from rich.markup import escape

from pomo_cli import __version__
from pomo_cli.models.pomodoro import (
    PomoError,
    TimerDisplay,
    TimerLoop,
    TimerStateStore,
    show_stopped_message,
)
from pomo_cli.utils.exit_codes import ERROR_GENERAL
from pomo_cli.utils.logger import close_logger, get_logger
from pomo_cli.utils.ui.console import get_console, get_error_console

app = typer.Typer(
    name="pomo",
    help="A simple Pomodoro timer",
    add_completion=False,
)

console = get_console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]pomo[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


@app.command()
def run(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Run the Pomodoro timer: 25 minutes of work, then a 5 minute break.

    Keys: 'p' pause, 'r' resume, 'q' or Ctrl+C quit. Progress is kept in
    ~/.pomo.json, so quitting and starting again picks up where you left off.
    """
    logger = get_logger(__name__)
    try:
        loop = TimerLoop(store=TimerStateStore(), display=TimerDisplay(console))
        state = loop.run()
    except PomoError as e:
        logger.error("fatal: %s", e)
        get_error_console().print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=ERROR_GENERAL) from e
    finally:
        close_logger()

    show_stopped_message(state, console)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
