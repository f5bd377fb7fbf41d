# tests/dom/test_builder.py
import pytest

from content_auditor.dom.builder import DOMBuilder
from content_auditor.dom.core import COMMENT_TAG, Node
from content_auditor.dom.elements.image import ImageElement
from content_auditor.dom.elements.link import LinkElement
from content_auditor.dom.elements.media import MediaElement
from content_auditor.dom.registry import DOMRegistry


@pytest.fixture
def builder():
    return DOMBuilder()


def test_registry_discovers_element_definitions(builder):
    """Alle element-modules worden gevonden en geregistreerd."""
    assert DOMRegistry.get_model("img") is ImageElement
    assert DOMRegistry.get_model("a") is LinkElement
    for tag in ["video", "audio", "iframe"]:
        assert DOMRegistry.get_model(tag) is MediaElement
    assert DOMRegistry.get_model("h1") is None


def test_registry_upgrades_plain_nodes(builder):
    """as_model zet een gewone Node om naar het geregistreerde model."""
    plain = Node(tag="img", attrs={"src": "a.png", "alt": "A"})
    image = DOMRegistry.as_model(plain)

    assert isinstance(image, ImageElement)
    assert image.has_alt_text
    assert DOMRegistry.as_model(image) is image

    paragraph = Node(tag="p")
    assert DOMRegistry.as_model(paragraph) is paragraph


def test_parse_full_document(builder):
    """Een compleet document levert root, taal, origin en doctype op."""
    html = """<!DOCTYPE html>
    <html lang="nl-NL"><head><title>Tuin</title></head>
    <body><h1>Rozen</h1><p>Tekst over <a href="/snoeien">snoeien</a>.</p></body></html>"""
    doc = builder.parse_doc("https://www.example.com/rozen?x=1", html)

    assert doc.has_doctype is True
    assert doc.lang == "nl-NL"
    assert doc.origin == "https://www.example.com"
    assert doc.root.tag == "html"
    assert doc.body.tag == "body"

    h1 = doc.body.find_first("h1")
    assert type(h1) is Node
    assert h1.get_text() == "Rozen"

    link = doc.body.find_first("a")
    assert isinstance(link, LinkElement)
    assert link.href == "/snoeien"


def test_parse_fragment_is_wrapped(builder):
    """Een fragment zonder <html> krijgt een synthetische root; body valt terug op de root."""
    doc = builder.parse_doc("", "<p>Los fragment</p><img src='a.png' alt='A'>")

    assert doc.root.tag == "html"
    assert doc.lang is None
    assert doc.body is doc.root
    assert doc.origin == ""

    image = doc.body.find_first("img")
    assert isinstance(image, ImageElement)
    assert image.has_alt_text


def test_parse_empty_html(builder):
    """Lege invoer geeft een document zonder boom."""
    doc = builder.parse_doc("https://example.com/", "   ")
    assert doc.root is None
    assert doc.body is None


def test_comments_are_kept_as_nodes(builder):
    """Commentaar wordt als '#comment' node bewaard maar telt niet mee als tekst."""
    doc = builder.parse_doc("", "<div><!--noindex--><p>Verborgen</p><!--/noindex--></div>")
    div = doc.body.find_first("div")

    assert [child.tag for child in div.children] == [COMMENT_TAG, "p", COMMENT_TAG]
    assert div.children[0].text == "noindex"
    assert div.get_text() == "Verborgen"


def test_multi_valued_attributes_are_joined(builder):
    """class en rel worden als enkele string opgeslagen."""
    doc = builder.parse_doc("", '<a href="https://x.org" rel="nofollow noopener" class="btn big">x</a>')
    link = doc.body.find_first("a")

    assert link.get_attr("class") == "btn big"
    assert link.has_class("big")
    assert link.is_nofollow
    assert link.get_attr("missing") is None


def test_media_source_fallback(builder):
    """<video> zonder src gebruikt de src van het eerste <source> element."""
    doc = builder.parse_doc("", '<video><source src="clip.mp4"></video>'
                                '<iframe src="https://www.youtube.com/embed/abc"></iframe>')
    video, iframe = doc.body.find_all("video", "iframe")

    assert isinstance(video, MediaElement)
    assert video.src == "clip.mp4"
    assert iframe.embed_type == "YouTube"


def test_bom_is_stripped(builder):
    """Een BOM aan het begin van de bron verstoort de doctype-detectie niet."""
    doc = builder.parse_doc("", "\ufeff<!doctype html><html><body><p>Hoi</p></body></html>")
    assert doc.has_doctype is True
    assert doc.body.get_text(strip=True) == "Hoi"
