"""Event records and the listener/target contracts shared by the package."""

from __future__ import annotations

import types
from typing import Any, Callable, Dict, Hashable, Mapping, Protocol, runtime_checkable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    ValidationError,
    field_validator,
    model_serializer,
    model_validator,
)

from .exceptions import InvalidEventError

Listener = Callable[["Event"], Any]


class Event(BaseModel):
    """Record handed to every listener during a dispatch loop.

    ``cancelable`` opts the record into early termination: once a listener
    returns ``False`` or sets ``canceled`` the remaining listeners are skipped.
    Extra keyword fields are kept and readable as attributes.

    ``target`` is bound by the dispatching :class:`EventDispatcher` and cannot
    be assigned by callers or listeners. Once bound it is included in
    ``model_dump()`` (as its ``repr`` in JSON mode).
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Routing key used to select listeners")
    cancelable: bool = False
    canceled: bool = False

    _target: Any = PrivateAttr(default=None)

    @model_validator(mode="before")
    @classmethod
    def drop_caller_target(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "target" in data:
            return {key: value for key, value in data.items() if key != "target"}
        return data

    @field_validator("cancelable", "canceled", mode="before")
    @classmethod
    def none_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @model_serializer(mode="wrap")
    def include_bound_target(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> Dict[str, Any]:
        data = handler(self)
        if self._target is not None:
            data["target"] = repr(self._target) if info.mode_is_json() else self._target
        return data

    @property
    def target(self) -> Any:
        """Object reported as the originator of the event."""

        return self._target

    def clone(self) -> "Event":
        """Return a shallow copy with no bound target."""

        duplicate = self.model_copy()
        duplicate._target = None
        return duplicate

    def _bind_target(self, target: Any) -> None:
        self._target = target


@runtime_checkable
class EventTarget(Protocol):
    """Anything listeners can be added to and removed from by event name."""

    def add_listener(self, event: str, listener: Listener) -> None:  # pragma: no cover - Protocol
        ...

    def remove_listener(self, event: str, listener: Listener) -> None:  # pragma: no cover - Protocol
        ...


def listener_key(listener: Listener) -> Hashable:
    """Return the identity under which ``listener`` is stored.

    Plain callables are keyed by object identity, so unhashable callables are
    accepted and distinct objects that compare equal stay separate. Bound
    methods are keyed by their instance and function, because each
    ``obj.method`` lookup creates a new method object.
    """

    if isinstance(listener, types.MethodType):
        return ("method", id(listener.__self__), id(listener.__func__))
    if isinstance(listener, types.BuiltinMethodType) and listener.__self__ is not None:
        return ("builtin", id(listener.__self__), listener.__name__)
    return ("object", id(listener))


def coerce_event(event: "str | Event | Mapping[str, Any]") -> Event:
    """Return a fresh :class:`Event` for ``event`` without touching the input."""

    if isinstance(event, str):
        return Event(name=event)
    if isinstance(event, Event):
        return event.clone()
    if isinstance(event, Mapping):
        try:
            return Event.model_validate(dict(event))
        except ValidationError as exc:
            raise InvalidEventError(f"Invalid event record: {exc}") from exc
    raise InvalidEventError(
        f"Expected an event name, Event or mapping, got {type(event).__name__}"
    )


__all__ = ["Event", "EventTarget", "Listener", "coerce_event", "listener_key"]
