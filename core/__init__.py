"""
Runtime core for gotest.

Bootstrap pieces shared by every command:
- Data directory resolution
- Log sink management
- SQLite-backed config store
- Daily update-availability check
"""

NAME = "gotest"
__version__ = "0.1.0"
