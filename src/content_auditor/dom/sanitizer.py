# src/content_auditor/dom/sanitizer.py
import logging
from typing import List, Optional

from .core import Node
from .models import HTMLDocument
from .technical_filter import TechnicalContentFilter
from ..config import SanitizerConfig

logger = logging.getLogger(__name__)


class DocumentSanitizer:
    """
    Produces an analysis-ready copy of a document tree.

    The input tree is never mutated: the sanitized tree is rebuilt node by node,
    and removal is expressed as omission while rebuilding. Two kinds of nodes
    disappear:

    1. Excluded regions: exclusion attributes/classes, <noindex> elements,
       robots-style markers naming an exclusion keyword, and sibling ranges
       enclosed by <!--noindex--> ... <!--/noindex--> comment directives.
    2. Technical elements (<script>, <style>, <code>, ...) unless they sit inside
       an important-content container, in which case they are kept and cleaned.

    Every surviving leaf is then passed through the TechnicalContentFilter.
    """

    def __init__(self, config: Optional[SanitizerConfig] = None,
                 technical_filter: Optional[TechnicalContentFilter] = None):
        self.config = config or SanitizerConfig()
        self.technical_filter = technical_filter or TechnicalContentFilter(self.config.extra_technical_patterns)

        self._exclusion_attributes = set(self.config.exclusion_attributes)
        self._exclusion_classes = set(self.config.exclusion_classes)
        self._exclusion_tags = set(self.config.exclusion_tags)
        self._keywords = [k.lower() for k in self.config.exclusion_keywords]
        self._technical_tags = set(self.config.technical_tags)
        self._important_tags = set(self.config.important_tags)
        self._important_roles = set(self.config.important_roles)
        self._important_classes = set(self.config.important_classes)

    def sanitize(self, tree: Optional[Node]) -> Optional[Node]:
        """
        Returns the sanitized copy of `tree`. A None tree stays None; a root that
        is itself excluded yields an empty element of the same tag.
        """
        if tree is None:
            return None

        pruned = self._rebuild(tree, inside_important=False)
        if pruned is None:
            pruned = Node(tag=tree.tag, attrs=dict(tree.attrs))
        return self.technical_filter.clean_tree(pruned)

    def sanitize_document(self, doc: HTMLDocument) -> HTMLDocument:
        """Returns a copy of the document whose tree has been sanitized."""
        return doc.model_copy(update={"root": self.sanitize(doc.root)})

    # --- Classification ---

    def is_excluded(self, node: Node) -> bool:
        """True if the element marks a region that must not be analysed."""
        if node.tag in self._exclusion_tags:
            return True
        if any(node.has_attr(attr) for attr in self._exclusion_attributes):
            return True
        if any(cls in self._exclusion_classes for cls in node.classes):
            return True

        # meta-robots style markers: <meta name="robots" content="noindex">, data-robots="noindex"
        markers = []
        name = node.get_attr("name")
        if name is not None and name.strip().lower() == "robots":
            markers.append(node.get_attr("content") or "")
        data_robots = node.get_attr("data-robots")
        if data_robots is not None:
            markers.append(data_robots)
        return any(self._names_keyword(marker) for marker in markers)

    def is_important(self, node: Node) -> bool:
        """True if the element is an important-content container."""
        if node.tag in self._important_tags:
            return True
        role = node.get_attr("role")
        if role is not None and role.strip().lower() in self._important_roles:
            return True
        return any(cls in self._important_classes for cls in node.classes)

    def _names_keyword(self, value: str) -> bool:
        value = value.lower()
        return any(keyword in value for keyword in self._keywords)

    def _comment_directive(self, node: Node) -> Optional[str]:
        """Returns 'open' or 'close' for <!--noindex--> / <!--/noindex--> comments."""
        if not node.is_comment:
            return None
        directive = node.text.strip().lower()
        if directive in self._keywords:
            return "open"
        if directive.startswith("/") and directive[1:].strip() in self._keywords:
            return "close"
        return None

    # --- Rebuilding ---

    def _rebuild(self, node: Node, inside_important: bool) -> Optional[Node]:
        if node.is_text:
            return node.model_copy()
        if node.is_comment:
            return None

        if self.is_excluded(node):
            logger.debug(f"Removed excluded region <{node.tag}>")
            return None

        if node.tag in self._technical_tags and not inside_important:
            logger.debug(f"Removed technical element <{node.tag}>")
            return None

        children = self._rebuild_children(node.children, inside_important or self.is_important(node))
        return node.model_copy(update={"attrs": dict(node.attrs), "children": children})

    def _rebuild_children(self, children: List[Node], inside_important: bool) -> List[Node]:
        rebuilt = []
        skipping = False
        for child in children:
            directive = self._comment_directive(child)
            if directive == "open":
                skipping = True
                continue
            if directive == "close":
                skipping = False
                continue
            if skipping:
                continue

            new_child = self._rebuild(child, inside_important)
            if new_child is not None:
                rebuilt.append(new_child)
        return rebuilt
