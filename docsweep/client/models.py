# docsweep/client/models.py
"""
Data models exchanged with the content API.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from docsweep.parser.content_view import ContentView, SoupContentView


@dataclass(slots=True, frozen=True)
class ListedChild:
    """One entry of a folder listing: a folder (no ``ext``) or a file."""

    path: str
    ext: Optional[str] = None
    name: Optional[str] = None
    last_modified: Optional[int] = None

    @property
    def is_file(self) -> bool:
        return bool(self.ext)

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> ListedChild:
        """Build from one item of the ``/list`` JSON array."""
        path = raw.get("path")
        if not isinstance(path, str) or not path:
            raise ValueError(f"listing entry without a path: {raw!r}")
        ext = raw.get("ext")
        modified = raw.get("lastModified")
        return cls(
            path=path,
            ext=str(ext) if ext else None,
            name=raw.get("name"),
            last_modified=modified if isinstance(modified, int) else None,
        )


@dataclass(slots=True)
class Document:
    """Fetched source of a file plus a lazily parsed content view."""

    path: str
    text: str
    _view: Optional[ContentView] = field(default=None, repr=False, compare=False)

    @property
    def view(self) -> ContentView:
        if self._view is None:
            self._view = SoupContentView.from_markup(self.text)
        return self._view
