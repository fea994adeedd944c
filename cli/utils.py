"""CLI utility functions."""

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from core.context import AppContext

console = Console()
err_console = Console(stderr=True)


def get_state(ctx: typer.Context) -> AppContext:
    """Fetch the AppContext the bootstrap handed to typer."""
    state = ctx.find_object(AppContext)
    if state is None:
        raise RuntimeError("command invoked without an AppContext")
    return state


def fail(message: str, exit_code: int = 1) -> typer.Exit:
    """Log and print an error, return the Exit to raise."""
    logger.error(message)
    err_console.print(f"[red]Error:[/] {escape(message)}", soft_wrap=True)
    return typer.Exit(exit_code)


def confirm(state: AppContext, prompt: str) -> bool:
    """Ask for confirmation unless --yes was given."""
    if state.yes:
        return True
    return typer.confirm(prompt)
