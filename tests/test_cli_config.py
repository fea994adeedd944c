import pytest

from cli.config import UPDATE_TIMEOUT_ENV, get_update_timeout
from core.errors import ConfigError
from core.update import REQUEST_TIMEOUT


def test_update_timeout_default(monkeypatch):
    monkeypatch.delenv(UPDATE_TIMEOUT_ENV, raising=False)

    assert get_update_timeout() == REQUEST_TIMEOUT


def test_update_timeout_from_env(monkeypatch):
    monkeypatch.setenv(UPDATE_TIMEOUT_ENV, "2.5")

    assert get_update_timeout() == 2.5


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_update_timeout_invalid(monkeypatch, raw):
    monkeypatch.setenv(UPDATE_TIMEOUT_ENV, raw)

    with pytest.raises(ConfigError, match=UPDATE_TIMEOUT_ENV):
        get_update_timeout()
