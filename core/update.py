"""
Update-availability check against a GitHub "latest release" endpoint.

The daily gate lives here too: at most one network check per 24 hours,
with the check time recorded before the request goes out so a failed or
interrupted check does not retry on the very next run.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

import httpx
from loguru import logger
from packaging.version import InvalidVersion, Version

from core import NAME
from core.config import (
    LAST_UPDATE_CHECK,
    UPDATE_NOTIFY,
    format_timestamp,
    get_value,
    now_utc,
    parse_timestamp,
    set_value,
)
from core.database import Database
from core.errors import ConfigError, UpdateCheckError

# =============================================================================
# CONFIGURATION
# =============================================================================

RELEASE_REPO = f"Data-Corruption/{NAME}"
RELEASE_URL = f"https://api.github.com/repos/{RELEASE_REPO}/releases/latest"
REQUEST_TIMEOUT = 10.0
CHECK_INTERVAL = timedelta(hours=24)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class Release:
    """A published release."""

    version: str
    url: str
    published_at: str | None = None


@dataclass(frozen=True)
class UpdateInfo:
    """Result of comparing the running version with the latest release."""

    current: str
    latest: Release

    @property
    def available(self) -> bool:
        return is_newer(self.latest.version, self.current)


# =============================================================================
# VERSIONS
# =============================================================================


def strip_tag(tag: str) -> str:
    """'v1.2.3' -> '1.2.3'."""
    tag = tag.strip()
    return tag[1:] if tag[:1] in ("v", "V") else tag


def parse_version(value: str) -> Version:
    try:
        return Version(strip_tag(value))
    except InvalidVersion as e:
        raise UpdateCheckError(f"invalid version {value!r}") from e


def is_newer(latest: str, current: str) -> bool:
    """True if latest is a strictly higher version than current."""
    return parse_version(latest) > parse_version(current)


# =============================================================================
# API FUNCTIONS
# =============================================================================


def fetch_latest_release(
    url: str = RELEASE_URL,
    timeout: float = REQUEST_TIMEOUT,
    client: httpx.Client | None = None,
) -> Release:
    """Fetch the latest release from the release source.

    Args:
        url: "latest release" endpoint (GitHub REST API shape)
        timeout: Request timeout in seconds
        client: Optional client to reuse (tests inject a mock transport)

    Returns:
        The latest Release.

    Raises:
        UpdateCheckError: On transport/HTTP errors or an unexpected payload.
    """
    headers = {"Accept": "application/vnd.github+json"}
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    try:
        resp = client.get(url, headers=headers)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as e:
        raise UpdateCheckError(
            f"release source returned {e.response.status_code} for {url}"
        ) from e
    except httpx.HTTPError as e:
        raise UpdateCheckError(f"failed to reach release source: {e}") from e
    except ValueError as e:
        raise UpdateCheckError(f"invalid JSON from release source: {e}") from e
    finally:
        if owns_client:
            client.close()

    if not isinstance(data, dict) or not data.get("tag_name"):
        raise UpdateCheckError("release source response has no tag_name")

    tag = data["tag_name"]
    if not isinstance(tag, str):
        raise UpdateCheckError(f"release tag_name is not a string: {tag!r}")

    html_url = data.get("html_url") or ""
    published_at = data.get("published_at")
    if not isinstance(html_url, str) or not isinstance(published_at, (str, type(None))):
        raise UpdateCheckError("release source response has malformed fields")

    return Release(version=strip_tag(tag), url=html_url, published_at=published_at)


def check(
    current_version: str,
    url: str = RELEASE_URL,
    timeout: float = REQUEST_TIMEOUT,
    client: httpx.Client | None = None,
) -> UpdateInfo:
    """Compare the running version against the latest release."""
    parse_version(current_version)
    latest = fetch_latest_release(url, timeout, client)
    info = UpdateInfo(current=current_version, latest=latest)
    logger.info(
        f"Latest release {latest.version}, running {current_version} "
        f"(update available: {info.available})"
    )
    return info


# =============================================================================
# DAILY GATE
# =============================================================================


def is_check_due(
    last_check: datetime,
    now: datetime,
    interval: timedelta = CHECK_INTERVAL,
) -> bool:
    return now - last_check > interval


def daily_check(
    db: Database,
    current_version: str,
    *,
    now: datetime | None = None,
    checker: Callable[[str], UpdateInfo] = check,
) -> UpdateInfo | None:
    """Run the update check if notifications are on and a day has passed.

    Returns:
        UpdateInfo when a check ran, None when it was skipped.

    Raises:
        ConfigError: If the stored settings are missing or malformed.
        UpdateCheckError: If the check itself fails.
    """
    if not get_value(db, UPDATE_NOTIFY, bool):
        return None

    raw = get_value(db, LAST_UPDATE_CHECK, str)
    try:
        last_check = parse_timestamp(raw)
    except ValueError as e:
        raise ConfigError(f"failed to parse {LAST_UPDATE_CHECK} time: {e}") from e

    now = now or now_utc()
    if not is_check_due(last_check, now):
        logger.debug(f"Skipping update check, last check at {raw}")
        return None

    logger.debug("Checking for updates...")
    set_value(db, LAST_UPDATE_CHECK, format_timestamp(now))
    return checker(current_version)
