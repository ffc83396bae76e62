"""Synchronous publish/subscribe for edit-session notifications.

The edit buffer tracker publishes a :class:`SessionEvent` after every state
transition so the grid and the launch list can refresh without holding a
reference to each other.

A raising handler is recorded in :attr:`EventBus.errors`; the remaining
handlers still run and the publisher never sees the exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

__all__ = ["SessionEvent", "Event", "EventBus", "EventHandler", "Subscription"]


class SessionEvent(str, Enum):
    SESSION_LOADED = "session_loaded"
    LINES_STAGED = "lines_staged"
    STRUCTURE_CHANGED = "structure_changed"
    SESSION_SAVED = "session_saved"
    SESSION_DISCARDED = "session_discarded"
    SAVE_FAILED = "save_failed"


@dataclass(frozen=True)
class Event:
    name: SessionEvent
    payload: Any


EventHandler = Callable[[Event], None]


@dataclass
class Subscription:
    event: SessionEvent
    handler: EventHandler


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[SessionEvent, List[Subscription]] = {}
        self._errors: List[Tuple[Event, Exception]] = []

    def subscribe(self, event: SessionEvent, handler: EventHandler) -> Subscription:
        sub = Subscription(event=event, handler=handler)
        self._subs.setdefault(event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event, [])
        self._subs[sub.event] = [s for s in bucket if s is not sub]

    def publish(self, event: SessionEvent, payload: Any = None) -> Event:
        evt = Event(name=event, payload=payload)
        # copy so handlers may unsubscribe while being called
        for sub in list(self._subs.get(event, ())):
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate subscriber failures
                self._errors.append((evt, exc))
        return evt

    @property
    def errors(self) -> List[Tuple[Event, Exception]]:
        return list(self._errors)
