"""Main CLI entry point for gotest."""

import sqlite3
import sys
import threading
from contextlib import ExitStack, contextmanager
from typing import Iterator

import typer
from loguru import logger

from cli.commands import config, update
from cli.config import RELEASE_URL, UPDATE_NOTICE, get_update_timeout
from cli.utils import console, err_console, get_state
from core import NAME, __version__
from core.config import LOG_LEVEL, get_value, init_config
from core.context import AppContext, cancel_on_signals
from core.database import open_database
from core.errors import GotestError, OperationCancelled, StartupError
from core.logs import DEFAULT_LOG_LEVEL, LEVELS, open_log
from core.paths import ensure_data_dirs, get_data_path
from core.update import UpdateInfo, check, daily_check

app = typer.Typer(
    name=NAME,
    help="gotest - example CLI application",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(update.app, name="update", help="Check for new releases")
app.add_typer(config.app, name="config", help="Show or change stored settings")


def _version_callback(ctx: typer.Context, value: bool):
    if not value:
        return
    state = ctx.find_object(AppContext)
    console.print(f"{NAME} version {state.version if state else __version__}")
    raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    log: str = typer.Option(
        None,
        "--log",
        metavar="LEVEL",
        help=f"Override log level ({'|'.join(LEVELS)})",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Answer yes to all prompts",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        is_eager=True,
        callback=_version_callback,
        help="Show version and exit",
    ),
):
    """gotest - example CLI application."""
    state = get_state(ctx)
    state.yes = yes

    # Explicit --log wins over the stored level, for this run only
    if log is not None:
        try:
            state.log.set_level(log)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="'--log'")
        logger.debug(f"Log level overridden to {state.log.level}")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def version(ctx: typer.Context):
    """Show version information."""
    state = get_state(ctx)
    console.print(f"{NAME} version {state.version}")


# =============================================================================
# BOOTSTRAP
# =============================================================================


@contextmanager
def _step(description: str) -> Iterator[None]:
    """Wrap a bootstrap step's failure as a StartupError."""
    try:
        yield
    except OperationCancelled:
        raise
    except (GotestError, OSError, ValueError, sqlite3.Error) as e:
        raise StartupError(f"failed to {description}: {e}") from e


def _check_release(current_version: str) -> UpdateInfo:
    return check(current_version, url=RELEASE_URL, timeout=get_update_timeout())


def bootstrap(
    stack: ExitStack,
    cancelled: threading.Event | None = None,
    app_version: str = __version__,
) -> AppContext:
    """Resolve paths, open log and database, load config.

    Everything opened is registered on the stack so it is closed on exit.
    """
    with _step("get data path"):
        data_path = get_data_path()
    with _step("create data path"):
        log_dir = ensure_data_dirs(data_path)
    with _step("initialize logger"):
        log = stack.enter_context(open_log(log_dir, DEFAULT_LOG_LEVEL))
    with _step("initialize database"):
        db = stack.enter_context(open_database(data_path))
    logger.debug("Database initialized")

    with _step("initialize config"):
        init_config(db)
    logger.debug("Config initialized")

    with _step("get log level from config"):
        level = get_value(db, LOG_LEVEL, str)
    with _step("set log level"):
        log.set_level(level)

    state = AppContext(version=app_version, data_path=data_path, log=log, db=db)
    if cancelled is not None:
        state.cancelled = cancelled
    return state


def notify_if_update(state: AppContext) -> None:
    """Once-a-day update check, prints a single notice line."""
    with _step("check for updates"):
        info = daily_check(state.db, state.version, checker=_check_release)
    if info is not None and info.available:
        console.print(UPDATE_NOTICE)


def dispatch(state: AppContext, argv: list[str] | None = None) -> int:
    """Run the typer app and turn its outcome into an exit code.

    typer runs in standalone mode: it prints usage errors and aborted
    prompts itself and exits, so only the exit status is mapped here.
    """
    try:
        app(args=argv, prog_name=NAME, obj=state)
    except SystemExit as e:
        code = e.code if isinstance(e.code, int) else (0 if e.code is None else 1)
        if code != 0:
            logger.error(f"Command exited with code {code}")
            return 1
        return 0
    except GotestError as e:
        logger.error(str(e))
        err_console.print(str(e), markup=False, soft_wrap=True)
        return 1
    except Exception as e:
        logger.exception(f"Command failed: {e}")
        err_console.print(f"error: {e}", markup=False, soft_wrap=True)
        return 1
    return 0


def run(argv: list[str] | None = None) -> int:
    """Bootstrap and run one CLI invocation. Returns the process exit code."""
    with cancel_on_signals() as cancelled, ExitStack() as stack:
        try:
            state = bootstrap(stack, cancelled)
            notify_if_update(state)
            return dispatch(state, argv)
        except GotestError as e:
            err_console.print(str(e), markup=False, soft_wrap=True)
            return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
