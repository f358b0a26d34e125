class AgingMapError(Exception):
    """Base exception class for the aging map package."""

    pass


class InvalidTTLError(AgingMapError, ValueError):
    """Raised when a map is constructed with an unusable time-to-live."""

    def __init__(self, message, ttl=None):
        super().__init__(message)
        self.ttl = ttl


class ConfigError(AgingMapError):
    """Raised for configuration-related errors."""

    pass
