# src/content_auditor/dom/technical_filter.py
import logging
import re
from typing import List, Optional, Pattern

from .core import Node
from ..utils.technical_patterns import TECHNICAL_PATTERNS

logger = logging.getLogger(__name__)

# Boundaries used to split a technical line into smaller fragments
FRAGMENT_SPLIT = re.compile(r"(?<=[;}.!?])\s+")
WORD_CHAR = re.compile(r"\w")


class TechnicalContentFilter:
    """
    Classifies text fragments as technical (code, markup, templating) and
    cleans leaf elements of the document tree line by line.

    Structural removal of <script>/<style>-like elements is done by the
    DocumentSanitizer; this filter only ever rewrites text, it never drops
    an element.
    """

    def __init__(self, extra_patterns: Optional[List[str]] = None):
        self.patterns: List[Pattern] = list(TECHNICAL_PATTERNS)
        for expression in extra_patterns or []:
            self.patterns.append(re.compile(expression, re.IGNORECASE))

    def is_technical(self, text: str) -> bool:
        """True if any technical pattern matches the text."""
        if not text:
            return False
        return any(pattern.search(text) for pattern in self.patterns)

    def filter_text(self, text: str) -> str:
        """
        Drops the technical parts of a text.

        The text is split on newlines; non-empty lines without a match are kept
        unchanged. A matching line is split into fragments after ';', '}' and
        sentence punctuation, and only the clean fragments that still contain
        a word character survive.
        """
        kept_lines = []
        for line in text.split("\n"):
            if not line.strip():
                continue
            if not self.is_technical(line):
                kept_lines.append(line)
                continue

            fragments = [
                fragment.strip() for fragment in FRAGMENT_SPLIT.split(line)
                if fragment.strip() and WORD_CHAR.search(fragment) and not self.is_technical(fragment)
            ]
            if fragments:
                kept_lines.append(" ".join(fragments))

        cleaned = "\n".join(kept_lines)
        if self.is_technical(cleaned):
            # Joining fragments re-created a match across a boundary
            logger.debug("Filtered text still technical after joining, dropping it")
            return ""
        return cleaned

    def clean_tree(self, node: Node) -> Node:
        """
        Returns a copy of `node` where every technical leaf has been line-filtered.
        Elements with child elements are recursed into, leaves are tested.
        """
        if not node.is_element:
            return node.model_copy()

        if node.element_children:
            return node.model_copy(update={
                "attrs": dict(node.attrs),
                "children": [self.clean_tree(child) for child in node.children],
            })

        return self.clean_leaf(node)

    def clean_leaf(self, node: Node) -> Node:
        """Replaces the text of a leaf element when it contains technical content."""
        text = node.text_content
        if not self.is_technical(text):
            return node.model_copy(update={
                "attrs": dict(node.attrs),
                "children": [child.model_copy() for child in node.children if not child.is_comment],
            })

        filtered = self.filter_text(text)
        logger.debug(f"Line-filtered technical text in <{node.tag}>")
        children = [Node(text=filtered)] if filtered else []
        return node.model_copy(update={"attrs": dict(node.attrs), "children": children})
