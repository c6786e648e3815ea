"""Listener registry and the synchronous dispatch loop."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Mapping, Tuple

from .config import DispatcherSettings
from .events import Event, Listener, coerce_event, listener_key
from .exceptions import DispatchDepthError
from .logging import get_logger
from .telemetry import MetricsCollector

LOGGER = get_logger("dispatcher")


class EventDispatcher:
    """Keeps listeners per event name and calls them in the order they were added.

    ``target`` is what listeners see as ``event.target``; when omitted the
    dispatcher reports itself.
    """

    def __init__(
        self,
        target: Any = None,
        *,
        settings: DispatcherSettings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._target = target
        self._settings = settings or DispatcherSettings()
        if metrics is None and self._settings.collect_metrics:
            metrics = MetricsCollector()
        self._metrics = metrics
        # insertion-ordered, keyed by listener_key
        self._listeners: Dict[str, Dict[Hashable, Listener]] = {}
        self._depth = 0

    @property
    def target(self) -> Any:
        return self if self._target is None else self._target

    @property
    def settings(self) -> DispatcherSettings:
        return self._settings

    @property
    def metrics(self) -> MetricsCollector | None:
        return self._metrics

    def add_listener(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(event, {}).setdefault(listener_key(listener), listener)

    def on(self, event: str, listener: Listener) -> None:
        """Alias of :meth:`add_listener`."""

        self.add_listener(event, listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners is None:
            return
        listeners.pop(listener_key(listener), None)
        if not listeners:
            del self._listeners[event]

    def off(self, event: str, listener: Listener) -> None:
        """Alias of :meth:`remove_listener`."""

        self.remove_listener(event, listener)

    def listeners(self, event: str) -> Tuple[Listener, ...]:
        listeners = self._listeners.get(event)
        return () if listeners is None else tuple(listeners.values())

    def has_listeners(self, event: str) -> bool:
        return event in self._listeners

    def dispatch(self, event: "str | Event | Mapping[str, Any]") -> None:
        """Run the dispatch loop for ``event``.

        ``event`` may be a name, an :class:`Event` or a mapping with at least a
        ``name`` key. Records are copied first so the caller's object is never
        modified. If the record is cancelable the loop stops before the next
        listener once a listener returned ``False`` or ``canceled`` is set;
        a record dispatched already canceled reaches no listener at all.

        Listeners added while the loop runs wait for the next dispatch; ones
        removed before their turn are skipped. Exceptions raised by listeners
        propagate and end the loop.
        """

        record = coerce_event(event)
        listeners = self._listeners.get(record.name)
        if not listeners:
            self._count("events.unhandled")
            return

        max_depth = self._settings.max_depth
        if max_depth is not None and self._depth >= max_depth:
            raise DispatchDepthError(
                f"Dispatch of {record.name!r} exceeds max_depth={max_depth}"
            )

        record._bind_target(self.target)
        snapshot = tuple(listeners.items())
        LOGGER.debug(
            "dispatch event=%s",
            record.name,
            extra={"listener_count": len(snapshot), "depth": self._depth},
        )
        self._count("events.dispatched")

        self._depth += 1
        try:
            if self._metrics is None:
                self._run(record, snapshot)
            else:
                with self._metrics.time(f"dispatch.{record.name}"):
                    self._run(record, snapshot)
        finally:
            self._depth -= 1

    def _run(self, record: Event, listeners: Tuple[Tuple[Hashable, Listener], ...]) -> None:
        last_result: Any = None
        for index, (key, listener) in enumerate(listeners):
            if record.cancelable and (last_result is False or record.canceled):
                LOGGER.debug(
                    "dispatch canceled event=%s after %d listener(s)",
                    record.name,
                    index,
                )
                self._count("events.canceled")
                return
            if key not in self._listeners.get(record.name, ()):
                continue
            last_result = listener(record)
            self._count("listeners.invoked")

    def _count(self, name: str) -> None:
        if self._metrics is not None:
            self._metrics.increment(name)


__all__ = ["EventDispatcher"]
