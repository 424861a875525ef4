# File: docsweep/classifier.py
"""docsweep.classifier: blank-page detection for fetched documents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from docsweep.parser.content_view import ContentView

__all__ = ["ContentVerdict", "Classification", "normalize_whitespace", "inspect", "classify"]

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"[a-zA-Z]{3,}")

#: texts shorter than this need at least one 3-letter word to count as content
SHORT_TEXT_LIMIT = 20


class ContentVerdict(str, Enum):
    BLANK = "blank"
    SUBSTANTIVE = "substantive"


@dataclass(slots=True, frozen=True)
class Classification:
    """Verdict plus the diagnostics reported for blank pages."""

    verdict: ContentVerdict
    text: str
    markup_length: int
    child_count: int
    raw_text_length: int

    @property
    def is_blank(self) -> bool:
        return self.verdict is ContentVerdict.BLANK


def normalize_whitespace(value: str) -> str:
    """Collapse runs of whitespace to one space and trim both ends."""
    return _WHITESPACE_RE.sub(" ", value.strip()).strip()


def _is_blank(text: str, markup: str, view: ContentView) -> bool:
    child_count = view.child_count
    return (
        text == ""
        or markup == ""
        or text == " "
        or markup == " "
        or child_count == 0
        or (child_count == 1 and view.child_texts()[0].strip() == "")
        or (len(text) < SHORT_TEXT_LIMIT and not _WORD_RE.search(text))
    )


def inspect(view: ContentView) -> Classification:
    """Classify *view* and keep the numbers behind the decision."""
    raw_text = view.text_content.strip()
    text = normalize_whitespace(raw_text)
    markup = normalize_whitespace(view.inner_markup)
    verdict = ContentVerdict.BLANK if _is_blank(text, markup, view) else ContentVerdict.SUBSTANTIVE
    return Classification(
        verdict=verdict,
        text=text,
        markup_length=len(markup),
        child_count=view.child_count,
        raw_text_length=len(raw_text),
    )


def classify(view: ContentView) -> ContentVerdict:
    """Return BLANK or SUBSTANTIVE for the document behind *view*."""
    return inspect(view).verdict
