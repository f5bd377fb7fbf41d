# tests/services/test_element_stats_service.py
import pytest

from content_auditor.dom.builder import DOMBuilder
from content_auditor.dom.core import Node
from content_auditor.services.element_stats_service import ElementStatsService, get_image_format

ORIGIN = "https://www.example.com"

LINKS_HTML = """
<a href="/about" title="Over">Over ons</a>
<a href="https://example.com/x">x</a>
<a href="https://blog.example.com/">blog</a>
<a href="https://other.org/" rel="nofollow">other</a>
<a href="//cdn.other.org/x">cdn</a>
<a href="mailto:a@b.c">mail</a>
<a href="#top">top</a>
<a href="/leeg"></a>
<a href="/beeld"><img src="a.png" alt="A"></a>
<a>geen href</a>
"""


@pytest.fixture
def service():
    return ElementStatsService()


@pytest.fixture
def body():
    builder = DOMBuilder()
    return lambda html: builder.parse_doc(ORIGIN, f"<html><body>{html}</body></html>").body


def test_image_stats(service, body):
    stats = service.analyze_images(body(
        '<img src="/img/hero-large.jpg" alt="Roos" width="800" loading="lazy">'
        '<img src="/img/b.PNG" alt="">'
        '<img data-src="/img/c.webp">'
    ))
    assert stats.total == 3
    assert stats.with_alt == 1
    assert stats.with_dimensions == 1
    assert stats.lazy_loaded == 2
    assert stats.large_images == 1
    assert stats.alt_percentage == 33
    assert stats.lazy_percentage == 67
    assert stats.formats == {"JPEG": 1, "PNG": 1, "WebP": 1}


def test_no_images(service, body):
    """Zonder afbeeldingen blijven de percentages op hun neutrale waarde."""
    stats = service.analyze_images(body("<p>Tekst</p>"))
    assert stats.total == 0
    assert stats.alt_percentage == 100
    assert stats.lazy_percentage == 0
    assert service.analyze_images(None).total == 0


@pytest.mark.parametrize("src, fmt", [
    ("a.jpeg", "JPEG"), ("a.gif?v=2", "GIF"), ("a.svg", "SVG"), ("a.avif", "AVIF"), ("a", "Other"),
])
def test_get_image_format(src, fmt):
    assert get_image_format(src) == fmt


def test_link_classification(service, body):
    """Interne, externe, anker- en mailto-links worden correct ingedeeld."""
    stats = service.analyze_links(body(LINKS_HTML), ORIGIN)

    assert stats.total == 9
    assert stats.internal == 7
    assert stats.external == 2
    assert stats.with_nofollow == 1
    assert stats.nofollow_percentage == 50
    assert stats.with_title == 1
    assert stats.title_percentage == 11
    assert stats.broken == 1
    assert stats.broken_percentage == 11
    assert stats.types == {"internal": 7, "external": 2, "mailto": 1, "anchor": 1}


def test_absolute_links_are_external_without_origin(service, body):
    stats = service.analyze_links(body('<a href="https://example.com/x">x</a><a href="/y">y</a>'), "")
    assert stats.external == 1
    assert stats.internal == 1


def test_no_links(service, body):
    stats = service.analyze_links(body("<p>Geen links</p>"), ORIGIN)
    assert stats.total == 0
    assert stats.broken_percentage == 0


def test_multimedia(service, body):
    stats = service.analyze_multimedia(body(
        '<video src="a.mp4"></video><audio src="b.mp3"></audio>'
        '<iframe src="https://player.vimeo.com/video/1"></iframe>'
    ))
    assert (stats.videos, stats.audios, stats.iframes) == (1, 1, 1)
    assert stats.total == 3
    assert stats.embedded_content[0].type == "Vimeo"


def test_semantics_and_structure(service, body):
    semantics = service.analyze_semantics(body(
        "<header></header><nav></nav><main><article></article><article></article></main>"
    ))
    assert semantics.article == 2
    assert semantics.total_elements == 5

    structure = service.analyze_structure(semantics)
    assert structure.has_header and structure.has_nav and structure.has_main
    assert not structure.has_footer


def test_breadcrumbs(service, body):
    """Een nav met aria-label 'Breadcrumb' telt als kruimelpad."""
    stats = service.analyze_breadcrumbs(body(
        '<nav aria-label="Breadcrumb"><ol><li><a href="/">Home</a></li><li>Rozen</li></ol></nav>'
    ))
    assert stats.exists
    assert stats.elements == 4


def test_breadcrumbs_schema_markup(service, body):
    stats = service.analyze_breadcrumbs(body('<ol itemtype="https://schema.org/BreadcrumbList"><li>a</li></ol>'))
    assert stats.exists
    assert not service.analyze_breadcrumbs(body("<nav><a href='/'>Home</a></nav>")).exists


def test_hand_built_tree_is_analysed_by_tag(service):
    """Een boom van gewone Nodes (niet via de DOMBuilder) telt afbeeldingen, links en media mee."""
    tree = Node(tag="body", children=[
        Node(tag="img", attrs={"src": "rose.jpg", "alt": "Red rose", "loading": "lazy"}),
        Node(tag="a", attrs={"href": "/care", "rel": "nofollow"}, children=[Node(text="Care")]),
        Node(tag="a", attrs={"href": "https://other.org/"}),
        Node(tag="a", children=[Node(text="geen href")]),
        Node(tag="iframe", attrs={"src": "https://www.youtube.com/embed/x"}),
    ])

    images = service.analyze_images(tree)
    assert images.total == 1
    assert images.with_alt == 1
    assert images.lazy_loaded == 1
    assert images.formats == {"JPEG": 1}

    links = service.analyze_links(tree, ORIGIN)
    assert links.total == 2
    assert links.internal == 1
    assert links.external == 1
    assert links.broken == 1

    media = service.analyze_multimedia(tree)
    assert media.iframes == 1
    assert media.embedded_content[0].type == "YouTube"
