"""Route log records and command-line output through a shared rich console."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def configure_logging(verbose: bool) -> None:
    """Send log records to the console, at debug level if verbose and warning level otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", handlers=[RichHandler(console=console)], force=True)
