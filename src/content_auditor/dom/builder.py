# src/content_auditor/dom/builder.py
import logging
import re
from typing import List, Optional
from bs4 import BeautifulSoup, Tag, Doctype, Comment, NavigableString
from bs4.element import Declaration, ProcessingInstruction

from .models import HTMLDocument
from .core import Node, COMMENT_TAG, normalize_attrs
from .registry import DOMRegistry
from ..utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into a structured HTMLDocument model.
    It is the boundary between markup and the owned document tree the analysis works on.
    """

    def __init__(self):
        """Initializes the builder and ensures the DOMRegistry is populated."""
        DOMRegistry.discover()

    def parse_doc(self, url: str, html: str) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument object.

        Args:
            url (str): The URL of the page being parsed (used for its origin).
            html (str): The raw HTML string.

        Returns:
            HTMLDocument: A structured representation of the parsed page.
        """
        origin = UrlUtils.get_origin(url)
        if not html or not html.strip():
            return HTMLDocument(raw_url=url, origin=origin)

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '').strip()
        soup = BeautifulSoup(clean_html, 'html.parser')

        found_doctype = bool(re.search(r'<!doctype', clean_html[:1000], re.IGNORECASE))
        if not found_doctype:
            found_doctype = any(isinstance(item, Doctype) for item in soup.contents)

        html_tag = soup.find('html')
        if html_tag is not None:
            root = self._build_tree(html_tag)
        else:
            # Fragment without <html>: wrap the top level nodes in a synthetic root
            root = Node(tag='html', children=self._build_children(soup))

        lang = None
        if html_tag is not None:
            lang = root.get_attr('lang') or root.get_attr('xml:lang')
        if lang is not None:
            lang = lang.strip() or None

        logger.debug(f"Parsed {url or '<inline>'} (lang={lang}, doctype={found_doctype})")

        return HTMLDocument(
            raw_url=url,
            origin=origin,
            lang=lang,
            has_doctype=found_doctype,
            root=root,
        )

    def _build_children(self, tag: Tag) -> List[Node]:
        children = []
        for child in tag.children:
            node = self._build_node(child)
            if node is not None:
                children.append(node)
        return children

    def _build_node(self, item) -> Optional[Node]:
        if isinstance(item, Tag):
            return self._build_tree(item)
        if isinstance(item, Comment):
            return Node(tag=COMMENT_TAG, text=str(item))
        if isinstance(item, (Doctype, Declaration, ProcessingInstruction)):
            return None
        if isinstance(item, NavigableString):
            return Node(text=str(item))
        return None

    def _build_tree(self, tag: Tag) -> Node:
        """
        Recursively builds the simplified element tree from a BeautifulSoup Tag.
        """
        children = self._build_children(tag)

        # Retrieve specific parser from registry if available
        parser = DOMRegistry.get_parser(tag.name)
        if parser:
            return parser(tag, children)

        # Fallback for generic elements
        return Node(tag=tag.name, attrs=normalize_attrs(tag.attrs), children=children)
