"""Exception types raised by the gotest core."""


class GotestError(Exception):
    """Base class for all gotest errors."""


class DataPathError(GotestError):
    """The data directory could not be resolved."""


class ConfigError(GotestError):
    """A config key is missing, mistyped, or holds an invalid value."""


class UpdateCheckError(GotestError):
    """The release source could not be queried or understood."""


class OperationCancelled(GotestError):
    """An interrupt or termination signal was received."""


class StartupError(GotestError):
    """Bootstrap failed before any command could run."""
