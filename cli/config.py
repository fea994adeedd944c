"""CLI configuration and environment overrides."""

import os

from dotenv import load_dotenv

from core import NAME
from core.errors import ConfigError
from core.update import RELEASE_URL as DEFAULT_RELEASE_URL
from core.update import REQUEST_TIMEOUT

load_dotenv()  # Load .env file

ENV_PREFIX = NAME.upper()
UPDATE_TIMEOUT_ENV = f"{ENV_PREFIX}_UPDATE_TIMEOUT"

# Release source
RELEASE_URL = os.getenv(f"{ENV_PREFIX}_RELEASE_URL", DEFAULT_RELEASE_URL)

UPDATE_NOTICE = f"Update available! Run '{NAME} update check' to see details."


def get_update_timeout() -> float:
    """Request timeout for the release source, read when a check runs."""
    raw = os.getenv(UPDATE_TIMEOUT_ENV)
    if raw is None or not raw.strip():
        return REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"{UPDATE_TIMEOUT_ENV} must be a number, got {raw!r}") from e
    if timeout <= 0:
        raise ConfigError(f"{UPDATE_TIMEOUT_ENV} must be positive, got {raw!r}")
    return timeout
