"""Client construction for the CLI.

Centralizes creation of the PlayPath client from environment variables.
Hides configuration details from command implementations.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..client import PlayPathClient
from ..config import ClientConfig
from ..factory import create_client

# Default console for output
_console = Console()


def get_client(console: Console | None = None) -> PlayPathClient:
    """Create a PlayPath client from environment variables.

    Prompts for the API key when it is not configured.

    Args:
        console: Optional Rich console for output

    Returns:
        PlayPathClient instance

    Environment variables:
        PLAYPATH_BASE_URL: API base URL (default: http://localhost:3000)
        PLAYPATH_API_KEY: API key (prompted for if unset)
    """
    con = console or _console
    config = ClientConfig.from_env()

    api_key = config.api_key
    if not api_key:
        con.print("[yellow]Warning: PLAYPATH_API_KEY not set[/yellow]")
        api_key = typer.prompt("Enter your API key", hide_input=True)

    return create_client(base_url=config.base_url, api_key=api_key)


def configure_logging(verbose: bool) -> None:
    """Route library logs through Rich when verbose output is requested."""
    if not verbose:
        return
    logger = logging.getLogger("playpath")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
