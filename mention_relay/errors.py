"""Exception types raised by the relay and its adapters."""


class RelayError(Exception):
    """Base class for every relay failure."""


class ConfigurationError(RelayError):
    """Raised when required configuration is missing or malformed."""


class IdentityFetchError(RelayError):
    """Raised when getMe does not yield a usable bot identity."""


class FetchError(RelayError):
    """Raised when a getUpdates poll fails. The loop retries on the next pass."""


class CompletionError(RelayError):
    """Raised when the completion provider call fails or returns no content."""


class DeliveryError(RelayError):
    """Raised when sendMessage fails."""
