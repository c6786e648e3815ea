"""Bookkeeping for listeners attached to event targets owned elsewhere."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, Tuple

from .events import EventTarget, Listener, listener_key
from .logging import get_logger, log_event

LOGGER = get_logger("listeners")


@dataclass(slots=True)
class _Attachment:
    """Listeners attached to one target, grouped by event name."""

    target: EventTarget
    events: Dict[str, Dict[Hashable, Listener]] = field(default_factory=dict)


class ListenerManager:
    """Attaches listeners to targets and remembers them for later removal.

    Targets are tracked by identity, so objects that compare equal are still
    kept apart. Only what this manager attached is ever detached.
    """

    def __init__(self) -> None:
        self._attached: Dict[int, _Attachment] = {}

    def attach(self, target: EventTarget, event: str, listener: Listener) -> None:
        target.add_listener(event, listener)
        attachment = self._attached.get(id(target))
        if attachment is None:
            attachment = self._attached[id(target)] = _Attachment(target)
        attachment.events.setdefault(event, {}).setdefault(listener_key(listener), listener)
        LOGGER.debug("attached event=%s", event, extra={"target": target})

    def detach(self, target: EventTarget | None = None, event: str | None = None) -> None:
        """Remove listeners previously attached through :meth:`attach`.

        With both arguments only that target/event pair is cleared, with only
        ``target`` every event on it, and with neither everything this manager
        attached. Unknown targets and events are ignored.

        A listener is forgotten only once ``remove_listener`` returned for it;
        if the target raises, the error propagates and the listener stays
        recorded.
        """

        if target is not None:
            attachment = self._attached.get(id(target))
            attachments: Iterable[_Attachment] = () if attachment is None else (attachment,)
        else:
            attachments = tuple(self._attached.values())

        for attachment in attachments:
            names = (event,) if event is not None else tuple(attachment.events)
            for name in names:
                self._detach_event(attachment, name)
            if not attachment.events:
                del self._attached[id(attachment.target)]

        if target is None and event is None:
            log_event(LOGGER, "listeners_detached_all", level=logging.DEBUG)

    def _detach_event(self, attachment: _Attachment, event: str) -> None:
        listeners = attachment.events.get(event)
        if listeners is None:
            return
        for key, listener in tuple(listeners.items()):
            attachment.target.remove_listener(event, listener)
            del listeners[key]
        del attachment.events[event]
        LOGGER.debug("detached event=%s", event, extra={"target": attachment.target})

    def targets(self) -> Tuple[Any, ...]:
        return tuple(attachment.target for attachment in self._attached.values())

    def events(self, target: EventTarget) -> Tuple[str, ...]:
        attachment = self._attached.get(id(target))
        return () if attachment is None else tuple(attachment.events)

    def attached(self, target: EventTarget, event: str) -> Tuple[Listener, ...]:
        attachment = self._attached.get(id(target))
        if attachment is None:
            return ()
        return tuple(attachment.events.get(event, {}).values())

    def __len__(self) -> int:
        return len(self._attached)


__all__ = ["ListenerManager"]
