"""
Typed configuration on top of the key-value store.

Every known key has a type and a default. init_config() seeds whatever is
missing; afterwards get_value() and set_value() enforce the schema.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from loguru import logger

from core.database import Database
from core.errors import ConfigError
from core.logs import DEFAULT_LOG_LEVEL, LEVELS

# =============================================================================
# SCHEMA
# =============================================================================

LOG_LEVEL = "logLevel"
UPDATE_NOTIFY = "updateNotify"
LAST_UPDATE_CHECK = "lastUpdateCheck"

TRUE_STRINGS = {"true", "yes", "on", "1"}
FALSE_STRINGS = {"false", "no", "off", "0"}


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format an aware datetime as RFC3339 (second precision)."""
    if dt.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return dt.isoformat(timespec="seconds")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC3339 timestamp. A UTC offset is mandatory."""
    try:
        dt = datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid RFC3339 timestamp {value!r}") from e
    if dt.tzinfo is None:
        raise ValueError(f"invalid RFC3339 timestamp {value!r}: missing offset")
    return dt


@dataclass(frozen=True)
class ConfigKey:
    """Schema entry for one config key."""

    name: str
    type: type
    default: Callable[[], Any]
    description: str
    choices: tuple[str, ...] | None = None
    timestamp: bool = False

    def validate(self, value: Any) -> None:
        # bool is an int subclass, so compare exact types
        if type(value) is not self.type:
            raise ConfigError(
                f"config key {self.name} expects {self.type.__name__}, "
                f"got {type(value).__name__}"
            )
        if self.choices is not None and value not in self.choices:
            raise ConfigError(
                f"config key {self.name} must be one of {'|'.join(self.choices)}, "
                f"got {value!r}"
            )
        if self.timestamp:
            try:
                parse_timestamp(value)
            except ValueError as e:
                raise ConfigError(f"config key {self.name}: {e}") from e

    def parse(self, raw: str) -> Any:
        """Convert command-line text into a value of this key's type."""
        if self.type is bool:
            lowered = raw.strip().lower()
            if lowered in TRUE_STRINGS:
                return True
            if lowered in FALSE_STRINGS:
                return False
            raise ConfigError(f"config key {self.name} expects a boolean, got {raw!r}")
        value = raw.strip()
        if self.name == LOG_LEVEL:
            value = value.lower()
        return value


SCHEMA: dict[str, ConfigKey] = {
    LOG_LEVEL: ConfigKey(
        name=LOG_LEVEL,
        type=str,
        default=lambda: DEFAULT_LOG_LEVEL,
        description="Log file level",
        choices=tuple(LEVELS),
    ),
    UPDATE_NOTIFY: ConfigKey(
        name=UPDATE_NOTIFY,
        type=bool,
        default=lambda: True,
        description="Check for new releases once a day",
    ),
    LAST_UPDATE_CHECK: ConfigKey(
        name=LAST_UPDATE_CHECK,
        type=str,
        default=lambda: format_timestamp(now_utc()),
        description="Time of the last update check (RFC3339)",
        timestamp=True,
    ),
}


def get_key(name: str) -> ConfigKey:
    """Get schema entry by key name."""
    if name not in SCHEMA:
        raise ConfigError(
            f"unknown config key: {name}. Valid keys: {', '.join(SCHEMA)}"
        )
    return SCHEMA[name]


# =============================================================================
# ACCESS
# =============================================================================


def init_config(db: Database) -> None:
    """Seed missing keys with defaults and check the types of existing ones."""
    for key in SCHEMA.values():
        if not db.has(key.name):
            value = key.default()
            db.set(key.name, value)
            logger.debug(f"Seeded config {key.name}={value!r}")
        else:
            key.validate(db.get(key.name))


def get_value(db: Database, name: str, expected_type: type) -> Any:
    """Read a key and make sure it holds the expected type."""
    if not db.has(name):
        raise ConfigError(f"config key {name} not found")
    value = db.get(name)
    if type(value) is not expected_type:
        raise ConfigError(
            f"config key {name} is {type(value).__name__}, "
            f"not {expected_type.__name__}"
        )
    return value


def set_value(db: Database, name: str, value: Any) -> None:
    """Validate against the schema and persist."""
    key = get_key(name)
    key.validate(value)
    db.set(name, value)
    logger.debug(f"Config {name} set to {value!r}")


def reset_config(db: Database) -> None:
    """Overwrite every key with its default."""
    for key in SCHEMA.values():
        db.set(key.name, key.default())
    logger.info("Config reset to defaults")
