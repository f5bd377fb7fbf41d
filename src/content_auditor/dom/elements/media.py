from typing import List
from bs4 import Tag
from ..core import Node, ElementDefinition, normalize_attrs

EMBED_PROVIDERS = [
    (("youtube", "youtu.be"), "YouTube"),
    (("vimeo",), "Vimeo"),
    (("twitter",), "Twitter"),
    (("instagram",), "Instagram"),
    (("facebook",), "Facebook"),
]


class MediaElement(Node):
    """
    Model for embedded media (<video>, <audio>, <iframe>).
    """

    @property
    def src(self) -> str:
        src = self.get_attr('src')
        if src is None:
            # <video><source src="..."></video>
            source = self.find_first('source')
            src = source.get_attr('src') if source is not None else None
        return src or ''

    @property
    def embed_type(self) -> str:
        src = self.src.lower()
        for needles, name in EMBED_PROVIDERS:
            if any(needle in src for needle in needles):
                return name
        return "Other"


def parse_media(tag: Tag, children: List[Node]) -> MediaElement:
    return MediaElement(tag=tag.name, attrs=normalize_attrs(tag.attrs), children=children)


DEFINITION = ElementDefinition(
    tag_names=["video", "audio", "iframe"],
    model=MediaElement,
    parser=parse_media,
)
