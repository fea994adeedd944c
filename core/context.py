"""
Execution context shared by the bootstrap and every command.

Holds what would otherwise be process globals: version, data path, log
sink, database, and the cancellation flag set by SIGINT/SIGTERM.
"""

import signal
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from loguru import logger

from core.database import Database
from core.errors import OperationCancelled
from core.logs import LogSink

CANCEL_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@dataclass
class AppContext:
    """Per-process state threaded through typer's ctx.obj."""

    version: str
    data_path: Path
    log: LogSink
    db: Database
    cancelled: threading.Event = field(default_factory=threading.Event)
    yes: bool = False

    def raise_if_cancelled(self) -> None:
        if self.cancelled.is_set():
            raise OperationCancelled("operation cancelled")

    def close(self) -> None:
        """Close the database, then the log sink."""
        self.db.close()
        self.log.close()


@contextmanager
def cancel_on_signals(
    signals: tuple[signal.Signals, ...] = CANCEL_SIGNALS,
) -> Iterator[threading.Event]:
    """Turn interrupt/termination signals into OperationCancelled.

    The handler sets the yielded event and raises in the main thread, which
    aborts whatever blocking call is in progress. Previous handlers are
    restored on exit.
    """
    cancelled = threading.Event()

    def _handler(signum, frame):
        cancelled.set()
        name = signal.Signals(signum).name
        logger.warning(f"Received {name}, cancelling")
        raise OperationCancelled(f"cancelled by {name}")

    previous = {sig: signal.signal(sig, _handler) for sig in signals}
    try:
        yield cancelled
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
