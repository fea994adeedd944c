import os
from pathlib import Path

import pytest

from core.config import init_config
from core.context import AppContext
from core.database import Database
from core.logs import LogSink


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """Data directory with its logs folder already created."""
    path = tmp_path / ".gotest"
    (path / "logs").mkdir(parents=True)
    return path


@pytest.fixture
def db(data_dir):
    with Database(data_dir / "state.db") as database:
        yield database


@pytest.fixture
def config_db(db):
    """Database seeded with default config."""
    init_config(db)
    return db


@pytest.fixture
def log_sink(data_dir):
    sink = LogSink(data_dir / "logs")
    yield sink
    sink.close()


@pytest.fixture
def app_state(data_dir, config_db, log_sink) -> AppContext:
    return AppContext(
        version="1.0.0",
        data_path=data_dir,
        log=log_sink,
        db=config_db,
    )


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    """Run as a regular user whose home is tmp_path."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(os, "geteuid", lambda: 1000)
    return tmp_path
