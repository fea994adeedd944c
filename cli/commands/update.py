"""Update check commands."""

import typer
from rich.table import Table

from cli.config import RELEASE_URL, get_update_timeout
from cli.utils import console, fail, get_state
from core import NAME
from core.config import (
    LAST_UPDATE_CHECK,
    UPDATE_NOTIFY,
    format_timestamp,
    get_value,
    now_utc,
    set_value,
)
from core.errors import GotestError
from core.update import check

app = typer.Typer(help="Check for new releases")


@app.callback(invoke_without_command=True)
def update_default(ctx: typer.Context):
    """Check for a newer release (same as 'update check')."""
    if ctx.invoked_subcommand is not None:
        return
    update_check(ctx)


@app.command("check")
def update_check(ctx: typer.Context):
    """Query the release source and compare with the running version.

    Examples:
        gotest update check
    """
    state = get_state(ctx)
    state.raise_if_cancelled()

    try:
        info = check(state.version, url=RELEASE_URL, timeout=get_update_timeout())
        set_value(state.db, LAST_UPDATE_CHECK, format_timestamp(now_utc()))
    except GotestError as e:
        raise fail(f"update check failed: {e}")

    table = Table(title="Release Status", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Current", state.version)
    table.add_row("Latest", info.latest.version)
    table.add_row("Published", info.latest.published_at or "-")
    console.print(table)

    if info.available:
        console.print(
            f"\n[bold green]Update available:[/] {info.current} → {info.latest.version}"
        )
        if info.latest.url:
            console.print(f"[dim]{info.latest.url}[/]")
    else:
        console.print(f"\n[green]✓[/] {NAME} is up to date")


@app.command("notify")
def update_notify(
    ctx: typer.Context,
    enable: bool = typer.Option(
        None,
        "--on/--off",
        help="Turn the daily update check on or off",
    ),
):
    """Show or change the daily update notification setting.

    Examples:
        gotest update notify          # Show current setting
        gotest update notify --off    # Stop checking daily
    """
    state = get_state(ctx)

    if enable is None:
        current = get_value(state.db, UPDATE_NOTIFY, bool)
        last = get_value(state.db, LAST_UPDATE_CHECK, str)
        console.print(f"Daily update check: [bold]{'on' if current else 'off'}[/]")
        console.print(f"[dim]Last check: {last}[/]")
        return

    set_value(state.db, UPDATE_NOTIFY, enable)
    console.print(f"[green]Daily update check turned {'on' if enable else 'off'}[/]")
