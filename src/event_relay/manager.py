"""Facade combining an object's own event source with its outbound subscriptions."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Tuple

from .config import DispatcherSettings
from .dispatcher import EventDispatcher
from .events import Event, EventTarget, Listener
from .listeners import ListenerManager
from .logging import get_logger, log_event
from .telemetry import MetricsCollector

LOGGER = get_logger("manager")


class EventManager:
    """Event source for ``target`` plus a :class:`ListenerManager` for its subscriptions.

    Use it as an attribute (``self.events = EventManager(self)``) or
    standalone, in which case the manager reports itself as the target.
    """

    def __init__(
        self,
        target: Any = None,
        *,
        settings: DispatcherSettings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._dispatcher = EventDispatcher(
            self if target is None else target,
            settings=settings,
            metrics=metrics,
        )
        self._listener_manager = ListenerManager()

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def listener_manager(self) -> ListenerManager:
        return self._listener_manager

    @property
    def metrics(self) -> MetricsCollector | None:
        return self._dispatcher.metrics

    def add_listener(self, event: str, listener: Listener) -> None:
        self._dispatcher.add_listener(event, listener)

    def on(self, event: str, listener: Listener) -> None:
        self._dispatcher.on(event, listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        self._dispatcher.remove_listener(event, listener)

    def off(self, event: str, listener: Listener) -> None:
        self._dispatcher.off(event, listener)

    def listeners(self, event: str) -> Tuple[Listener, ...]:
        return self._dispatcher.listeners(event)

    def has_listeners(self, event: str) -> bool:
        return self._dispatcher.has_listeners(event)

    def dispatch(self, event: "str | Event | Mapping[str, Any]") -> None:
        self._dispatcher.dispatch(event)

    def attach(self, target: EventTarget, event: str, listener: Listener) -> None:
        self._listener_manager.attach(target, event, listener)

    def detach(self, target: EventTarget | None = None, event: str | None = None) -> None:
        self._listener_manager.detach(target, event)

    def forward(self, source: EventTarget, events: "str | Iterable[str]") -> None:
        """Re-dispatch ``events`` from ``source`` as if this manager emitted them.

        Each forwarded record keeps its name and fields but is copied and
        reports this manager's target. ``detach(source)`` stops forwarding.
        """

        names = (events,) if isinstance(events, str) else tuple(events)
        for name in names:
            self._listener_manager.attach(source, name, self._relay)
        log_event(LOGGER, "events_forwarded", {"events": list(names)}, level=logging.DEBUG)

    def _relay(self, event: Event) -> None:
        self._dispatcher.dispatch(event)


__all__ = ["EventManager"]
