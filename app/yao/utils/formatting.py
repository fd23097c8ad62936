"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Everything
yao says itself goes to stderr, like makepkg and pacman status lines,
so stdout stays free for the relayed output of child processes.
"""

import sys

from rich.console import Console
from rich.markup import escape

from yao.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stderr.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def print_step(message: str) -> None:
    """Print a pipeline step header (``==> message``)."""
    err_console.print(f"[bold_header]==>[/] {escape(message)}")


def print_command(display: str) -> None:
    """Echo an external command line in verbose mode."""
    err_console.print(f"[command]$ {escape(display)}[/]", highlight=False)


def print_info(message: str) -> None:
    """Print an info message."""
    err_console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"[success]{escape(message)}[/]")
