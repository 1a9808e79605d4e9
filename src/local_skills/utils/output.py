"""Rich console output and logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


console = Console()
err_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message. The message is shown verbatim, never as markup."""
    console.print(f"[red]✗[/red] {escape(message)}", style="red")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def configure_logging(verbose: bool = False) -> None:
    """Route library log records through rich.

    Args:
        verbose: Show debug records from local_skills instead of warnings only
    """
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("local_skills")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
