from typing import List, Optional
from bs4 import Tag
from ..core import Node, ElementDefinition, normalize_attrs


class ImageElement(Node):
    tag: str = "img"

    @property
    def src(self) -> str: return self.get_attr('src') or ''

    @property
    def alt(self) -> Optional[str]: return self.get_attr('alt')

    @property
    def has_alt_text(self) -> bool:
        # alt=None means the attribute is missing, alt="" marks a decorative image
        return self.alt is not None and bool(self.alt.strip())

    @property
    def has_dimensions(self) -> bool:
        return self.has_attr('width') or self.has_attr('height')

    @property
    def is_lazy(self) -> bool:
        loading = self.get_attr('loading')
        if loading is not None and loading.strip().lower() == 'lazy':
            return True
        return self.has_attr('data-lazy') or self.has_attr('data-src')


def parse_image(tag: Tag, children: List[Node]) -> ImageElement:
    return ImageElement(tag="img", attrs=normalize_attrs(tag.attrs), children=children)


# --- DEFINITION ---
DEFINITION = ElementDefinition(
    tag_names=["img"],
    model=ImageElement,
    parser=parse_image,
)
