# File: docsweep/transformer.py
"""docsweep.transformer: payload written back for substantive documents."""

from __future__ import annotations

from docsweep.parser.content_view import ContentView

__all__ = ["build_payload"]


def build_payload(view: ContentView) -> str:
    """Return the root element's own markup (``<body ...>...</body>``)."""
    return view.outer_markup
