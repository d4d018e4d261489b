"""Rich console formatting utilities.

Diagnostics go to stderr through Rich. Script output is raw bytes and
never passes through a console.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

_THEME = Theme(
    {
        "muted": "#b2bec3",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
    }
)

err_console = Console(theme=_THEME, stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr.

    Args:
        verbose: Log DEBUG records instead of WARNING and above.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(
        f"[warning]Warning:[/] {escape(message)}",
        markup=True,
        highlight=False,
        soft_wrap=True,
    )


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(
        f"[error]Error:[/] {escape(message)}",
        markup=True,
        highlight=False,
        soft_wrap=True,
    )
