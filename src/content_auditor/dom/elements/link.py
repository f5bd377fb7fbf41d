from typing import Optional, List
from bs4 import Tag
from ..core import Node, ElementDefinition, normalize_attrs


class LinkElement(Node):
    """
    Data model for anchor (<a>) tags.
    """
    tag: str = "a"

    @property
    def href(self) -> Optional[str]:
        """Convenience property to access the href attribute."""
        return self.get_attr('href')

    @property
    def rel_values(self) -> List[str]:
        rel = self.get_attr('rel')
        return rel.lower().split() if rel is not None else []

    @property
    def is_nofollow(self) -> bool:
        return 'nofollow' in self.rel_values

    @property
    def has_title(self) -> bool:
        title = self.get_attr('title')
        return title is not None and bool(title.strip())

    @property
    def has_image(self) -> bool:
        return any(node.tag == 'img' for node in self.iter_elements())


def parse_link(tag: Tag, children: List[Node]) -> LinkElement:
    """Parses a <a> tag into the LinkElement model."""
    return LinkElement(
        tag="a",
        attrs=normalize_attrs(tag.attrs),
        children=children
    )


# --- ELEMENT DEFINITION ---

DEFINITION = ElementDefinition(
    tag_names=["a"],
    model=LinkElement,
    parser=parse_link,
)
