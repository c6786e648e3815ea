"""Observer-pattern toolkit: event dispatchers, listener bookkeeping and a facade."""

from .config import DispatcherSettings, build_settings_from_dict, settings_from_env
from .dispatcher import EventDispatcher
from .events import Event, EventTarget, Listener, coerce_event, listener_key
from .exceptions import (
    ConfigurationError,
    DispatchDepthError,
    EventRelayError,
    InvalidEventError,
)
from .listeners import ListenerManager
from .manager import EventManager
from .telemetry import MetricsCollector

__all__ = [
    "ConfigurationError",
    "DispatchDepthError",
    "DispatcherSettings",
    "Event",
    "EventDispatcher",
    "EventManager",
    "EventRelayError",
    "EventTarget",
    "InvalidEventError",
    "Listener",
    "ListenerManager",
    "MetricsCollector",
    "build_settings_from_dict",
    "coerce_event",
    "listener_key",
    "settings_from_env",
]
