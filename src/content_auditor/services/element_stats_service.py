# src/content_auditor/services/element_stats_service.py
import logging
from collections import Counter
from typing import List, Optional

from content_auditor.dom.core import Node
from content_auditor.dom.elements.image import ImageElement
from content_auditor.dom.elements.link import LinkElement
from content_auditor.dom.elements.media import MediaElement
from content_auditor.dom.registry import DOMRegistry
from content_auditor.model import (
    ImageStats, LinkStats, MultimediaStats, EmbeddedContent,
    SemanticStats, BreadcrumbStats, StructureStats,
)
from content_auditor.utils.math_utils import percentage
from content_auditor.utils.url_utils import UrlUtils, NON_NAVIGABLE_SCHEMES

logger = logging.getLogger(__name__)

IMAGE_FORMATS = [
    ((".jpg", ".jpeg"), "JPEG"),
    ((".png",), "PNG"),
    ((".gif",), "GIF"),
    ((".webp",), "WebP"),
    ((".svg",), "SVG"),
    ((".avif",), "AVIF"),
]
LARGE_IMAGE_HINTS = ("large", "big", "hero")
MEDIA_TAGS = ("video", "audio", "iframe")
SEMANTIC_TAGS = ["header", "nav", "main", "footer", "article", "section", "aside", "figure", "figcaption"]


def get_image_format(src: str) -> str:
    src = src.lower()
    for extensions, name in IMAGE_FORMATS:
        if any(ext in src for ext in extensions):
            return name
    return "Other"


class ElementStatsService:
    """
    Simple per-element-type statistics over the sanitized tree:
    images, links, embedded media, semantic structure and breadcrumbs.

    Elements are selected by tag, so hand-built trees of plain Nodes are
    analysed the same way as trees from the DOMBuilder.
    """

    def __init__(self):
        DOMRegistry.discover()

    def analyze_images(self, tree: Optional[Node]) -> ImageStats:
        images: List[ImageElement] = _typed(tree, "img")
        if not images:
            return ImageStats()

        formats: Counter = Counter()
        for image in images:
            formats[get_image_format(image.src)] += 1

        total = len(images)
        with_alt = sum(1 for image in images if image.has_alt_text)
        with_dimensions = sum(1 for image in images if image.has_dimensions)
        lazy_loaded = sum(1 for image in images if image.is_lazy)

        return ImageStats(
            total=total,
            with_alt=with_alt,
            with_dimensions=with_dimensions,
            lazy_loaded=lazy_loaded,
            large_images=sum(1 for image in images if any(h in image.src.lower() for h in LARGE_IMAGE_HINTS)),
            alt_percentage=percentage(with_alt, total, empty=100),
            dimensions_percentage=percentage(with_dimensions, total, empty=100),
            lazy_percentage=percentage(lazy_loaded, total),
            formats=dict(formats),
        )

    def analyze_links(self, tree: Optional[Node], origin: str = "") -> LinkStats:
        """
        Classifies <a href> links relative to the page origin (scheme + host).
        Relative and unparsable hrefs count as internal.
        """
        links: List[LinkElement] = [link for link in _typed(tree, "a") if link.href is not None]
        if not links:
            return LinkStats()

        origin_host = UrlUtils.parse(origin).host if origin else ""
        types: Counter = Counter()
        internal = external = with_title = with_nofollow = broken = 0

        for link in links:
            href = link.href.strip()
            parsed = UrlUtils.parse(href)

            is_absolute = href.lower().startswith(("http://", "https://", "//"))
            if parsed.ok and is_absolute and not UrlUtils.is_same_site(parsed.host, origin_host):
                external += 1
                types["external"] += 1
                if link.is_nofollow:
                    with_nofollow += 1
            else:
                internal += 1
                types["internal"] += 1

            if href.startswith("#"):
                types["anchor"] += 1
            elif parsed.ok and parsed.scheme in NON_NAVIGABLE_SCHEMES:
                types[parsed.scheme] += 1

            if link.has_title:
                with_title += 1

            if not link.get_text().strip() and not link.has_image:
                broken += 1

        total = len(links)
        return LinkStats(
            total=total,
            internal=internal,
            external=external,
            with_title=with_title,
            with_nofollow=with_nofollow,
            broken=broken,
            title_percentage=percentage(with_title, total, empty=100),
            nofollow_percentage=percentage(with_nofollow, external),
            broken_percentage=percentage(broken, total),
            types=dict(types),
        )

    def analyze_multimedia(self, tree: Optional[Node]) -> MultimediaStats:
        media: List[MediaElement] = _typed(tree, *MEDIA_TAGS)
        iframes = [node for node in media if node.tag == "iframe"]
        return MultimediaStats(
            videos=sum(1 for node in media if node.tag == "video"),
            audios=sum(1 for node in media if node.tag == "audio"),
            iframes=len(iframes),
            embedded_content=[EmbeddedContent(type=node.embed_type, src=node.src) for node in iframes],
        )

    def analyze_semantics(self, tree: Optional[Node]) -> SemanticStats:
        counts = Counter(node.tag for node in tree.iter_elements()) if tree is not None else Counter()
        values = {tag: counts.get(tag, 0) for tag in SEMANTIC_TAGS}
        return SemanticStats(**values, total_elements=sum(values.values()))

    def analyze_structure(self, semantics: SemanticStats) -> StructureStats:
        return StructureStats(
            has_header=semantics.header > 0,
            has_nav=semantics.nav > 0,
            has_main=semantics.main > 0,
            has_footer=semantics.footer > 0,
        )

    def analyze_breadcrumbs(self, tree: Optional[Node]) -> BreadcrumbStats:
        if tree is None:
            return BreadcrumbStats()
        for node in tree.iter_elements():
            if is_breadcrumb(node):
                # descendant elements, the container itself excluded
                return BreadcrumbStats(exists=True, elements=sum(1 for _ in node.iter_elements()) - 1)
        return BreadcrumbStats()


def _typed(tree: Optional[Node], *tags: str) -> list:
    if tree is None:
        return []
    return [DOMRegistry.as_model(node) for node in tree.find_all(*tags)]


def is_breadcrumb(node: Node) -> bool:
    label = node.get_attr("aria-label")
    if label is not None and "breadcrumb" in label.lower():
        return True
    if node.has_class("breadcrumb") or node.has_class("breadcrumbs"):
        return True
    itemtype = node.get_attr("itemtype")
    return itemtype is not None and itemtype.rstrip("/").endswith("BreadcrumbList")
