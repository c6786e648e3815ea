"""Custom exceptions raised by event-relay."""


class EventRelayError(RuntimeError):
    """Base error for all event-relay exceptions."""


class ConfigurationError(EventRelayError):
    """Raised when dispatcher settings are invalid or missing."""


class InvalidEventError(EventRelayError, TypeError):
    """Raised when a value cannot be turned into an event record."""


class DispatchDepthError(EventRelayError):
    """Raised when nested dispatch calls exceed the configured depth."""
