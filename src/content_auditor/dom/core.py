# src/content_auditor/dom/core.py
from typing import Dict, Any, List, Callable, Type, Optional, Iterator
from pydantic import BaseModel, Field
from bs4 import Tag

TEXT_TAG = ""
COMMENT_TAG = "#comment"


class Node(BaseModel):
    """
    Data model for a single node of the simplified document tree.

    Text nodes carry an empty tag, comment nodes carry '#comment'.
    Element nodes own their children exclusively.
    """
    tag: str = TEXT_TAG
    attrs: Dict[str, str] = Field(default_factory=dict)
    text: str = ""
    children: List['Node'] = Field(default_factory=list)

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_TAG

    @property
    def is_comment(self) -> bool:
        return self.tag == COMMENT_TAG

    @property
    def is_element(self) -> bool:
        return not self.is_text and not self.is_comment

    @property
    def element_children(self) -> List['Node']:
        return [child for child in self.children if child.is_element]

    @property
    def text_content(self) -> str:
        """Concatenation of all descendant text nodes (DOM textContent semantics)."""
        return self.get_text()

    def get_text(self, separator: str = "", strip: bool = False) -> str:
        """
        Collects descendant text the way BeautifulSoup's get_text does.
        Comments never contribute.
        """
        parts = [s.strip() if strip else s for s in self._iter_strings()]
        if strip:
            parts = [p for p in parts if p]
        return separator.join(parts)

    def _iter_strings(self) -> Iterator[str]:
        if self.is_text:
            yield self.text
            return
        if self.is_comment:
            return
        for child in self.children:
            yield from child._iter_strings()

    # --- Attribute access ---

    def get_attr(self, name: str) -> Optional[str]:
        """Returns the attribute value, or None when the attribute is absent."""
        return self.attrs.get(name)

    def has_attr(self, name: str) -> bool:
        return name in self.attrs

    @property
    def classes(self) -> List[str]:
        value = self.get_attr("class")
        return value.split() if value is not None else []

    def has_class(self, name: str) -> bool:
        return name in self.classes

    # --- Traversal ---

    def iter_elements(self) -> Iterator['Node']:
        """Yields this node (if it is an element) and all descendant elements in document order."""
        if self.is_element:
            yield self
        for child in self.children:
            yield from child.iter_elements()

    def find_all(self, *tags: str) -> List['Node']:
        wanted = set(tags)
        return [node for node in self.iter_elements() if node.tag in wanted]

    def find_first(self, *tags: str) -> Optional['Node']:
        wanted = set(tags)
        return next((node for node in self.iter_elements() if node.tag in wanted), None)


class ElementDefinition:
    """
    Configuration object binding an HTML tag (or group of tags) to its model and parser.
    """

    def __init__(
            self,
            tag_names: List[str],
            model: Type[Node],
            parser: Callable[[Tag, List[Node]], Node],
    ):
        self.tag_names = tag_names
        self.model = model
        self.parser = parser


def normalize_attrs(attrs: Dict[str, Any]) -> Dict[str, str]:
    """
    BeautifulSoup returns multi-valued attributes (class, rel) as lists.
    The tree stores every attribute as a single string.
    """
    normalized = {}
    for key, value in attrs.items():
        if isinstance(value, (list, tuple)):
            normalized[key] = " ".join(str(v) for v in value)
        elif value is None:
            normalized[key] = ""
        else:
            normalized[key] = str(value)
    return normalized
