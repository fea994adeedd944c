"""Command-line interface for gotest."""

from core import NAME, __version__

__all__ = ["NAME", "__version__"]
