"""
Data directory resolution.

Root runs read the real location from an index file, everyone else gets a
dot-directory in their home.
"""

import os
from pathlib import Path

from loguru import logger

from core import NAME
from core.errors import DataPathError

# =============================================================================
# CONFIGURATION
# =============================================================================

DATA_INDEX_PATH = Path("/var/lib") / NAME / "index"
LOGS_DIR_NAME = "logs"
DIR_MODE = 0o755


# =============================================================================
# RESOLUTION
# =============================================================================


def read_index_file(index_path: Path) -> str:
    """Return the second line of an index file, exactly as written."""
    try:
        lines = index_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise DataPathError(f"failed to open {index_path}: {e}") from e

    if len(lines) < 2 or not lines[1]:
        raise DataPathError(f"malformed index file {index_path}")
    return lines[1]


def get_data_path(
    euid: int | None = None,
    index_path: Path = DATA_INDEX_PATH,
) -> Path:
    """Resolve the data directory for the current user.

    Args:
        euid: Effective user ID, defaults to the running process's.
        index_path: Index file consulted when running as root.

    Returns:
        Path to the data directory (not created).

    Raises:
        DataPathError: If the index file is missing or malformed (root),
            or the home directory cannot be determined (non-root).
    """
    if euid is None:
        euid = os.geteuid()

    if euid == 0:
        return Path(read_index_file(index_path))

    try:
        home = Path.home()
    except RuntimeError as e:
        raise DataPathError(f"cannot determine home dir: {e}") from e
    return home / f".{NAME}"


def ensure_data_dirs(data_path: Path) -> Path:
    """Create the data directory and its logs folder, return the logs folder."""
    log_dir = data_path / LOGS_DIR_NAME
    log_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    logger.debug(f"Data directory ready: {data_path}")
    return log_dir
