# File: tests/test_classifier.py
from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from docsweep.classifier import ContentVerdict, classify, inspect, normalize_whitespace
from docsweep.client.models import Document
from docsweep.parser.content_view import ContentView, SoupContentView
from docsweep.transformer import build_payload


def verdict_of(markup: str) -> ContentVerdict:
    return classify(SoupContentView.from_markup(markup))


@pytest.mark.parametrize(
    "markup,expected",
    [
        ("<html><body></body></html>", ContentVerdict.BLANK),
        ("<body>   </body>", ContentVerdict.BLANK),
        ("<body><p>Hello world</p></body>", ContentVerdict.SUBSTANTIVE),
        ("<body><div></div></body>", ContentVerdict.BLANK),
        ("<body><p>12 34 56 78 90</p></body>", ContentVerdict.BLANK),
        ("<body><p>ok testing 12</p></body>", ContentVerdict.SUBSTANTIVE),
        # two children, short text without a word
        ("<body><p>1</p><p>2</p></body>", ContentVerdict.BLANK),
        # twenty characters are enough even without letters
        ("<body><p>1234567890</p><p>1234567890</p></body>", ContentVerdict.SUBSTANTIVE),
        # only a comment: no child element
        ("<body><!-- draft --></body>", ContentVerdict.BLANK),
        # text directly in body but no element children
        ("<body>Plain text with words</body>", ContentVerdict.BLANK),
        ("<body><header></header><main></main><footer></footer></body>", ContentVerdict.BLANK),
        ("<body><main><img src='hero.png'></main></body>", ContentVerdict.BLANK),
        (
            "<body><header></header><main><div><p>Welcome to the foundation</p></div></main><footer></footer></body>",
            ContentVerdict.SUBSTANTIVE,
        ),
        ("<body>\n  <main>\n    <p>Hello there</p>\n  </main>\n</body>", ContentVerdict.SUBSTANTIVE),
    ],
)
def test_classify_rules(markup, expected):
    assert verdict_of(markup) is expected


def test_markup_without_body_gets_one():
    assert verdict_of("<p>Hello world</p>") is ContentVerdict.SUBSTANTIVE
    assert verdict_of("") is ContentVerdict.BLANK
    assert verdict_of("<html><head><title>A real title</title></head></html>") is ContentVerdict.BLANK


def test_inspect_reports_diagnostics():
    result = inspect(SoupContentView.from_markup("<body>\n <div>  </div>\n</body>"))

    assert result.is_blank
    assert result.text == ""
    assert result.child_count == 1
    assert result.markup_length == len("<div> </div>")
    assert result.raw_text_length == 0


def test_inspect_substantive_text_is_normalized():
    result = inspect(SoupContentView.from_markup("<body><p>Hello\n\n   big\tworld</p><p>again</p></body>"))

    assert result.verdict is ContentVerdict.SUBSTANTIVE
    assert result.text == "Hello big worldagain"
    assert result.child_count == 2


def test_classify_is_idempotent():
    doc = Document(path="/a.html", text="<body><main><p>Some content here</p></main></body>")
    assert classify(doc.view) is classify(doc.view)
    assert inspect(doc.view) == inspect(doc.view)


@pytest.mark.parametrize(
    "raw,expected",
    [("", ""), ("   ", ""), ("  a \n\t b  ", "a b"), ("a  b", "a b")],
)
def test_normalize_whitespace(raw, expected):
    assert normalize_whitespace(raw) == expected


@dataclass
class StaticView:
    """Hand-made ContentView, no parser involved."""

    text_content: str = ""
    inner_markup: str = ""
    outer_markup: str = "<body></body>"
    children: list[str] = field(default_factory=list)

    @property
    def child_count(self) -> int:
        return len(self.children)

    def child_texts(self) -> list[str]:
        return list(self.children)


def test_classifier_accepts_any_content_view():
    view = StaticView(
        text_content="Quarterly results are in",
        inner_markup="<h1>Quarterly results</h1><p>are in</p>",
        children=["Quarterly results", "are in"],
    )
    assert isinstance(view, ContentView)
    assert classify(view) is ContentVerdict.SUBSTANTIVE
    assert classify(StaticView(text_content="x", inner_markup="<p>x</p>", children=["x", ""])) is ContentVerdict.BLANK


def test_payload_is_the_body_element_itself():
    markup = '<html><head><title>t</title></head><body class="page" data-id="7"><main><p>Hello world</p></main></body></html>'
    payload = build_payload(SoupContentView.from_markup(markup))

    assert payload.startswith('<body class="page" data-id="7">')
    assert payload.endswith("</body>")
    assert "<p>Hello world</p>" in payload
    assert "<title>" not in payload


@pytest.mark.parametrize(
    "markup,expected",
    [
        (
            '<body><p>a&nbsp;b<br>c</p><img src="x"></body>',
            '<body><p>a&nbsp;b<br>c</p><img src="x"></body>',
        ),
        (
            "<body><p>Fish &amp; chips &lt;3</p><hr><input disabled></body>",
            '<body><p>Fish &amp; chips &lt;3</p><hr><input disabled=""></body>',
        ),
        ("<body><p>café © 2024</p></body>", "<body><p>café © 2024</p></body>"),
    ],
)
def test_payload_keeps_entities_and_void_tags(markup, expected):
    assert build_payload(SoupContentView.from_markup(markup)) == expected


def test_nbsp_only_body_is_still_blank():
    view = SoupContentView.from_markup("<body><p>&nbsp;</p></body>")
    assert view.inner_markup == "<p>&nbsp;</p>"
    assert classify(view) is ContentVerdict.BLANK
