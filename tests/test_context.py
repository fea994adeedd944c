import signal
import sqlite3

import pytest

from core.context import cancel_on_signals
from core.errors import OperationCancelled


@pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
def test_signal_cancels(signum):
    with cancel_on_signals() as cancelled:
        assert not cancelled.is_set()
        with pytest.raises(OperationCancelled, match=signal.Signals(signum).name):
            signal.raise_signal(signum)
        assert cancelled.is_set()


def test_previous_handlers_restored():
    before = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}

    with cancel_on_signals():
        assert signal.getsignal(signal.SIGTERM) is not before[signal.SIGTERM]

    after = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
    assert after == before


def test_raise_if_cancelled(app_state):
    app_state.raise_if_cancelled()

    app_state.cancelled.set()

    with pytest.raises(OperationCancelled):
        app_state.raise_if_cancelled()


def test_close_closes_database(app_state):
    app_state.close()

    with pytest.raises(sqlite3.ProgrammingError):
        app_state.db.get("logLevel")
