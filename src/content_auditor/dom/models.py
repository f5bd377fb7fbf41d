# src/content_auditor/dom/models.py
from typing import Optional
from pydantic import BaseModel
from .core import Node


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML document.

    Holds the root of the document tree together with the context the
    analysis needs: the page origin for link classification and the
    declared language for readability scoring.
    """
    raw_url: str = ""
    origin: str = ""
    lang: Optional[str] = None
    has_doctype: bool = False

    # The DOM Tree Structure (the <html> element)
    root: Optional[Node] = None

    @property
    def body(self) -> Optional[Node]:
        """The <body> element, or the root itself for fragments without one."""
        if self.root is None:
            return None
        return self.root.find_first('body') or self.root
