"""Stored configuration commands."""

import typer
from rich.markup import escape
from rich.table import Table

from cli.utils import confirm, console, fail, get_state
from core.config import SCHEMA, get_key, reset_config, set_value
from core.errors import ConfigError

app = typer.Typer(help="Show or change stored settings")


@app.command("show")
def config_show(ctx: typer.Context):
    """Show all stored settings."""
    state = get_state(ctx)
    stored = state.db.items()

    table = Table(title="Configuration", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Description", style="dim")

    for name, key in SCHEMA.items():
        value = stored.get(name)
        shown = str(value).lower() if isinstance(value, bool) else str(value)
        table.add_row(name, shown, key.description)

    console.print(table)
    console.print(f"\n[dim]Data directory: {state.data_path}[/]")


@app.command("set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Setting name (e.g., 'logLevel')"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a stored setting.

    Examples:
        gotest config set logLevel debug
        gotest config set updateNotify false
    """
    state = get_state(ctx)

    try:
        parsed = get_key(key).parse(value)
        set_value(state.db, key, parsed)
    except ConfigError as e:
        raise fail(str(e))

    console.print(f"[green]✓[/] {key} = {escape(value)}")


@app.command("reset")
def config_reset(ctx: typer.Context):
    """Restore every setting to its default."""
    state = get_state(ctx)

    if not confirm(state, "This will restore all settings to their defaults. Continue?"):
        console.print("[yellow]Aborted[/]")
        raise typer.Exit(0)

    reset_config(state.db)
    console.print("[green]Settings reset to defaults[/]")
