# tests/dom/test_sanitizer.py
import pytest

from content_auditor.dom.builder import DOMBuilder
from content_auditor.dom.core import Node
from content_auditor.dom.sanitizer import DocumentSanitizer
from content_auditor.dom.technical_filter import TechnicalContentFilter

GARDENING = "Function test() { return 1; } This is real content about gardening and roses."


@pytest.fixture
def sanitizer():
    return DocumentSanitizer()


@pytest.fixture
def body():
    builder = DOMBuilder()

    def _parse(html: str) -> Node:
        return builder.parse_doc("https://example.com/", f"<html><body>{html}</body></html>").body
    return _parse


def test_gardening_sentence_survives(sanitizer, body):
    """Prose op dezelfde regel als code blijft over, het code-fragment verdwijnt."""
    technical_filter = TechnicalContentFilter()
    assert technical_filter.is_technical(GARDENING)

    cleaned = sanitizer.sanitize(body(f"<p>{GARDENING}</p>"))
    text = cleaned.find_first("p").get_text()

    assert "gardening and roses" in text
    assert "return" not in text
    assert not technical_filter.is_technical(text)


def test_technical_tags_removed(sanitizer, body):
    """<script>, <style> en <code> buiten belangrijke containers worden verwijderd."""
    cleaned = sanitizer.sanitize(body(
        "<p>Echte tekst</p><script>var x = 1;</script><style>.a { color: red }</style><code>x()</code>"
    ))
    assert [node.tag for node in cleaned.element_children] == ["p"]


def test_technical_tags_kept_inside_important_container(sanitizer, body):
    """Binnen <article> blijft een <code> element staan."""
    cleaned = sanitizer.sanitize(body("<article><p>Uitleg</p><code>pip install rozen</code></article>"))
    code = cleaned.find_first("code")
    assert code is not None
    assert code.get_text() == "pip install rozen"


@pytest.mark.parametrize("markup", [
    '<div data-seo-exclude><p>Weg</p></div>',
    '<div data-nosnippet="true"><p>Weg</p></div>',
    '<div class="sidebar seo-ignore"><p>Weg</p></div>',
    '<noindex><p>Weg</p></noindex>',
    '<div data-robots="noindex, follow"><p>Weg</p></div>',
    '<div name="robots" content="NOINDEX"><p>Weg</p></div>',
])
def test_exclusion_markers(sanitizer, body, markup):
    """Elk uitsluitingskenmerk verwijdert de hele subtree."""
    cleaned = sanitizer.sanitize(body(f"<p>Blijft</p>{markup}"))
    assert cleaned.get_text(" ", strip=True) == "Blijft"


def test_comment_directive_range(sanitizer, body):
    """Alles tussen <!--noindex--> en <!--/noindex--> verdwijnt, net als het commentaar zelf."""
    cleaned = sanitizer.sanitize(body(
        "<p>Een</p><!-- noindex --><p>Twee</p><p>Drie</p><!--/noindex--><p>Vier</p><!-- gewoon -->"
    ))
    assert cleaned.get_text(" ", strip=True) == "Een Vier"
    assert all(not child.is_comment for child in cleaned.children)


def test_unclosed_comment_directive_runs_to_end_of_parent(sanitizer, body):
    """Zonder sluit-commentaar loopt het bereik tot het einde van de ouder."""
    cleaned = sanitizer.sanitize(body("<div><p>Een</p><!--seo-exclude--><p>Twee</p></div><p>Drie</p>"))
    assert cleaned.get_text(" ", strip=True) == "Een Drie"


def test_excluded_root_becomes_empty_element(sanitizer):
    """Een uitgesloten root levert een leeg element met dezelfde tag op."""
    root = Node(tag="section", attrs={"data-noindex": ""}, children=[Node(text="Weg")])
    cleaned = sanitizer.sanitize(root)
    assert cleaned.tag == "section"
    assert cleaned.children == []


def test_none_tree(sanitizer):
    assert sanitizer.sanitize(None) is None


def test_input_is_not_mutated(sanitizer, body):
    """De invoerboom blijft ongewijzigd."""
    tree = body(f"<p>{GARDENING}</p><script>var a = 2;</script><!--noindex--><p>x</p>")
    before = tree.model_dump()
    sanitizer.sanitize(tree)
    assert tree.model_dump() == before


def test_sanitize_is_idempotent(sanitizer, body):
    """Twee keer saneren geeft hetzelfde resultaat als een keer."""
    tree = body(
        f"<article><p>{GARDENING}</p><pre>const a = 1;\nGewone regel</pre></article>"
        "<div class='noindex'>x</div><p>Slot. Tekst!</p>"
    )
    once = sanitizer.sanitize(tree)
    twice = sanitizer.sanitize(once)
    assert twice.model_dump() == once.model_dump()


def test_clean_tree_is_copied_unchanged(sanitizer, body):
    """Een boom zonder iets te verwijderen komt er identiek uit."""
    tree = body("<h1>Titel</h1><ul><li>Een</li><li>Twee</li></ul>")
    assert sanitizer.sanitize(tree).model_dump() == tree.model_dump()


def test_filter_text_keeps_clean_lines():
    """Regels zonder code blijven staan, code-regels worden gefilterd."""
    technical_filter = TechnicalContentFilter()
    text = "Eerste regel\nconst a = 1;\n\nLaatste regel"
    assert technical_filter.filter_text(text) == "Eerste regel\nLaatste regel"


def test_extra_patterns_are_used():
    """Extra patronen uit de configuratie worden toegevoegd."""
    technical_filter = TechnicalContentFilter(extra_patterns=[r"\bSELECT\s+\*"])
    assert technical_filter.is_technical("select * from pages")
    assert not TechnicalContentFilter().is_technical("select * from pages")


@pytest.mark.parametrize("text", [
    "You can return 2 items within 30 days.",
    "Please return home (if you can) before dark.",
    "Return policy: we accept returns for 14 days.",
])
def test_prose_with_return_is_not_technical(text):
    """Het woord 'return' in gewone zinnen maakt de tekst niet technisch."""
    technical_filter = TechnicalContentFilter()
    assert not technical_filter.is_technical(text)
    assert technical_filter.filter_text(text) == text


@pytest.mark.parametrize("text", [
    "if (ok) { return false; }",
    "return getValue(a);",
    "x(); return",
])
def test_return_statements_are_technical(text):
    assert TechnicalContentFilter().is_technical(text)


def test_paragraph_with_return_is_counted(body):
    """Een alinea over retourneren blijft na het saneren volledig staan."""
    cleaned = DocumentSanitizer().sanitize(body("<p>You can return 2 items within 30 days.</p>"))
    assert cleaned.find_first("p").get_text() == "You can return 2 items within 30 days."
