# docsweep/events.py
"""
Structured event stream emitted by the scheduler and the per-file pipeline.

Reporting collaborators (the aggregator, the log renderer, tests) subscribe to
an :class:`EventStream`; the core never prints anything itself.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from docsweep.logger import logger

__all__ = ("EventKind", "SweepEvent", "EventStream", "EventRecorder", "log_event")


class EventKind(str, Enum):
    FOLDER_EXPANDED = "folder_expanded"
    LIST_FAILED = "list_failed"
    SKIPPED = "skipped"
    FETCH_FAILED = "fetch_failed"
    BLANK = "blank"
    SUBSTANTIVE = "substantive"
    PUBLISHED = "published"
    PUBLISH_FAILED = "publish_failed"
    CALLBACK_FAILED = "callback_failed"
    CRAWL_COMPLETE = "crawl_complete"


@dataclass(slots=True, frozen=True)
class SweepEvent:
    kind: EventKind
    path: str
    detail: Dict[str, Any] = field(default_factory=dict)


Subscriber = Callable[[SweepEvent], None]


class EventStream:
    """Fan-out of :class:`SweepEvent` to subscribers.

    A subscriber that raises is logged and skipped; reporting never changes
    the control flow of a sweep.
    """

    def __init__(self, subscribers: Optional[List[Subscriber]] = None) -> None:
        self._subscribers: List[Subscriber] = list(subscribers or [])

    def subscribe(self, subscriber: Subscriber) -> Subscriber:
        self._subscribers.append(subscriber)
        return subscriber

    def emit(self, kind: EventKind, path: str, **detail: Any) -> SweepEvent:
        event = SweepEvent(kind, path, detail)
        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.exception("Event subscriber %r failed on %s", subscriber, kind.value)
        return event


class EventRecorder:
    """Subscriber that keeps every event in order."""

    def __init__(self) -> None:
        self.events: List[SweepEvent] = []

    def __call__(self, event: SweepEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> List[SweepEvent]:
        return [e for e in self.events if e.kind is kind]

    def paths(self, kind: EventKind) -> List[str]:
        return [e.path for e in self.of_kind(kind)]


def log_event(event: SweepEvent) -> None:
    """Render an event on the project logger."""
    d = event.detail
    kind = event.kind
    if kind is EventKind.BLANK:
        logger.warning(
            "BLANK PAGE DETECTED: %s | text=%r | html length=%d | body children=%d | raw text length=%d",
            event.path,
            d.get("text", ""),
            d.get("markup_length", 0),
            d.get("child_count", 0),
            d.get("raw_text_length", 0),
        )
    elif kind is EventKind.SUBSTANTIVE:
        logger.info("Page has content: %s (%d chars)", event.path, d.get("text_length", 0))
    elif kind is EventKind.PUBLISHED:
        logger.info("Published %s (HTTP %s)", event.path, d.get("status"))
    elif kind in (EventKind.LIST_FAILED, EventKind.FETCH_FAILED, EventKind.PUBLISH_FAILED):
        logger.error("%s: %s: %s", kind.value, event.path, d.get("error", ""))
    elif kind is EventKind.CALLBACK_FAILED:
        logger.error("File callback failed for %s: %s", event.path, d.get("error", ""))
    elif kind is EventKind.CRAWL_COMPLETE:
        logger.info(
            "Crawl completed: %d files in %d folders (%d listing failures)",
            d.get("files", 0),
            d.get("folders", 0),
            d.get("list_failures", 0),
        )
    else:
        logger.debug("%s: %s", kind.value, event.path)
