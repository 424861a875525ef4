# === FILE: docsweep/parser/content_view.py ===
"""Read-only view over a document's root content element.

The classifier and the publish transformer only need a handful of operations
on the ``<body>`` of a document:

* ``text_content`` - concatenated text of the root, like DOM ``textContent``;
* ``inner_markup`` - serialized children of the root;
* ``outer_markup`` - the root element itself, tag and attributes included;
* ``child_count`` / ``child_texts`` - direct child *elements* and their text.

:class:`ContentView` is the protocol; :class:`SoupContentView` implements it
on top of BeautifulSoup. Anything else satisfying the protocol (a test double,
another parser) can be handed to :func:`docsweep.classifier.classify`.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import Doctype, Tag
from bs4.formatter import HTMLFormatter

__all__: Sequence[str] = ("ContentView", "SoupContentView")


def _escape_markup(value: str) -> str:
    return EntitySubstitution.substitute_xml(value).replace("\xa0", "&nbsp;")


# Serializes like the DOM: only &, <, > and no-break spaces are escaped, and
# void elements are written as <br>, never <br/>.
DOM_FORMATTER = HTMLFormatter(entity_substitution=_escape_markup, void_element_close_prefix=None)


@runtime_checkable
class ContentView(Protocol):
    """Operations the content pipeline needs from a parsed document."""

    @property
    def text_content(self) -> str: ...

    @property
    def inner_markup(self) -> str: ...

    @property
    def outer_markup(self) -> str: ...

    @property
    def child_count(self) -> int: ...

    def child_texts(self) -> list[str]: ...


class SoupContentView:
    """:class:`ContentView` backed by a BeautifulSoup ``<body>`` tag."""

    __slots__ = ("root",)

    def __init__(self, root: Tag) -> None:
        self.root = root

    @classmethod
    def from_markup(cls, markup: str) -> SoupContentView:
        """Parse *markup* and wrap its body.

        Markup without a ``<body>`` gets one, the way a browser's parser would:
        every top-level node except the doctype and ``<head>`` moves into it.
        """
        soup = BeautifulSoup(markup, "html.parser")
        body = soup.body
        if body is None:
            container = soup.html or soup
            body = soup.new_tag("body")
            for node in list(container.contents):
                if isinstance(node, Doctype):
                    continue
                if isinstance(node, Tag) and node.name == "head":
                    continue
                body.append(node.extract())
            container.append(body)
        return cls(body)

    @property
    def text_content(self) -> str:
        return self.root.get_text()

    @property
    def inner_markup(self) -> str:
        return self.root.decode_contents(formatter=DOM_FORMATTER)

    @property
    def outer_markup(self) -> str:
        return self.root.decode(formatter=DOM_FORMATTER)

    def _child_elements(self) -> list[Tag]:
        return [node for node in self.root.children if isinstance(node, Tag)]

    @property
    def child_count(self) -> int:
        return len(self._child_elements())

    def child_texts(self) -> list[str]:
        return [child.get_text() for child in self._child_elements()]
