"""Exception hierarchy for opldat."""


class OplDataError(Exception):
    """Base error for all opldat failures."""
    pass


class ConfigurationError(OplDataError):
    """Raised when a formatting configuration is malformed."""
    pass


class SerializationError(OplDataError):
    """Raised when an element tree cannot be converted to or from a dict."""
    pass


class DataFileWriteError(OplDataError, OSError):
    """Raised when a rendered data file cannot be written to disk."""
    pass
