"""Decorators for xensieve CLI commands."""

import functools
import logging
from typing import Callable, Any
import typer
from rich.console import Console

from .parser import ExpressionError

logger = logging.getLogger(__name__)
console = Console()


def handle_sieve_errors(func: Callable) -> Callable:
    """
    Decorator to handle common sieve command errors.

    Centralizes error handling for:
    - ExpressionError: The sieve expression failed to compile
    - ValueError: Invalid arguments (e.g. a zero range step)
    - KeyboardInterrupt: User stopped a long iteration
    - General exceptions: Unexpected errors
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except ExpressionError as e:
            console.print(f"[bold red]Error:[/bold red] {type(e).__name__}: {e}")
            raise typer.Exit(code=1)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] Invalid input: {e}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except typer.Exit:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper
