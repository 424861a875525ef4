# File: docsweep/aggregator.py
"""docsweep.aggregator: folds the event stream of a sweep into a report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, TypedDict

from docsweep.events import EventKind, SweepEvent


class BlankPageInfo(TypedDict, total=False):
    """A page classified as blank and left untouched."""

    path: str
    text: str
    markup_length: int
    child_count: int
    raw_text_length: int


class ErrorInfo(TypedDict, total=False):
    """A remote call or callback that failed during the sweep."""

    path: str
    kind: str
    message: str
    status: Optional[int]
    reason: str


_ERROR_KINDS = (
    EventKind.LIST_FAILED,
    EventKind.FETCH_FAILED,
    EventKind.PUBLISH_FAILED,
    EventKind.CALLBACK_FAILED,
)

_COUNTED = (
    EventKind.FOLDER_EXPANDED,
    EventKind.SKIPPED,
    EventKind.BLANK,
    EventKind.SUBSTANTIVE,
    EventKind.PUBLISHED,
) + _ERROR_KINDS


@dataclass(slots=True)
class SweepReport:
    """Counts, blank pages and errors of one sweep."""

    root_path: str = ""
    dry_run: bool = False
    files: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=lambda: {k.value: 0 for k in _COUNTED})
    blank_pages: List[BlankPageInfo] = field(default_factory=list)
    published: List[str] = field(default_factory=list)
    errors: List[ErrorInfo] = field(default_factory=list)
    duration: float = 0.0

    def record(self, event: SweepEvent) -> None:
        """Event-stream subscriber."""
        kind = event.kind
        if kind is EventKind.CRAWL_COMPLETE:
            self.duration = float(event.detail.get("seconds", 0.0))
            return
        if kind.value in self.counts:
            self.counts[kind.value] += 1
        if kind is EventKind.BLANK:
            d = event.detail
            self.blank_pages.append(
                {
                    "path": event.path,
                    "text": d.get("text", ""),
                    "markup_length": d.get("markup_length", 0),
                    "child_count": d.get("child_count", 0),
                    "raw_text_length": d.get("raw_text_length", 0),
                }
            )
        elif kind is EventKind.PUBLISHED:
            self.published.append(event.path)
        elif kind in _ERROR_KINDS:
            error: ErrorInfo = {
                "path": event.path,
                "kind": kind.value,
                "message": str(event.detail.get("error", "")),
                "status": event.detail.get("status"),
            }
            if "reason" in event.detail:
                error["reason"] = event.detail["reason"]
            self.errors.append(error)

    @property
    def total_files(self) -> int:
        return len(self.files)

    def summary(self) -> Dict[str, Any]:
        return {
            "root_path": self.root_path,
            "dry_run": self.dry_run,
            "total_files": self.total_files,
            "folders": self.counts[EventKind.FOLDER_EXPANDED.value],
            "blank": self.counts[EventKind.BLANK.value],
            "substantive": self.counts[EventKind.SUBSTANTIVE.value],
            "published": self.counts[EventKind.PUBLISHED.value],
            "skipped": self.counts[EventKind.SKIPPED.value],
            "errors": len(self.errors),
            "duration": self.duration,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["summary"] = self.summary()
        return data

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)
