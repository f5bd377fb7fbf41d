# src/content_auditor/services/text_metrics_service.py
import logging
import math
import re
from typing import List, Optional, Tuple

from content_auditor.config import TextConfig
from content_auditor.dom.core import Node
from content_auditor.dom.technical_filter import TechnicalContentFilter
from content_auditor.model import TextStats, HeadingStats, HeadingLevelStats, HeadingTitle
from content_auditor.utils.math_utils import round_int

logger = logging.getLogger(__name__)

SENTENCE_SPLIT = re.compile(r"[.!?]+")
LETTER = re.compile(r"[^\W\d_]")


class MetricsExtractor:
    """
    Derives text and heading statistics from a sanitized document tree.

    Word, character and sentence counts come only from a whitelist of
    SEO-relevant elements. Each whitelisted element contributes its own text;
    text belonging to a nested whitelisted element is counted there, so nested
    content (<article><p>...</p></article>) is never counted twice.
    """

    def __init__(self, config: Optional[TextConfig] = None,
                 technical_filter: Optional[TechnicalContentFilter] = None):
        self.config = config or TextConfig()
        self.technical_filter = technical_filter or TechnicalContentFilter()
        self._content_tags = set(self.config.content_tags)

    # --- Text statistics ---

    def content_blocks(self, tree: Optional[Node]) -> List[str]:
        """Own text of every whitelisted element that is neither empty nor technical."""
        if tree is None:
            return []

        blocks = []
        for node in tree.iter_elements():
            if node.tag not in self._content_tags:
                continue
            text = self._own_text(node).strip()
            if not text or self.technical_filter.is_technical(text):
                continue
            blocks.append(text)
        return blocks

    def extract_words(self, tree: Optional[Node]) -> Tuple[List[str], int]:
        """Returns the content words and the sentence count used for readability scoring."""
        words: List[str] = []
        sentences = 0
        for block in self.content_blocks(tree):
            words.extend(block.split())
            sentences += count_sentences(block)
        return words, sentences

    def extract_text_stats(self, tree: Optional[Node]) -> TextStats:
        if tree is None:
            return TextStats()

        total_chars = 0
        words: List[str] = []
        sentences = 0
        for block in self.content_blocks(tree):
            total_chars += len(block)
            words.extend(block.split())
            sentences += count_sentences(block)

        total_words = len(words)
        content_words = sum(1 for word in words if LETTER.search(word))
        paragraphs = len(tree.find_all('p'))

        stats = TextStats(
            total_chars=total_chars,
            total_words=total_words,
            content_words=content_words,
            sentences=sentences,
            paragraphs=paragraphs,
            lists=len(tree.find_all('ul', 'ol')),
            tables=len(tree.find_all('table')),
            reading_time_minutes=math.ceil(total_words / self.config.words_per_minute),
            avg_sentence_length=round_int(total_words / sentences) if sentences > 0 else 0,
            avg_paragraph_length=round_int(content_words / paragraphs) if paragraphs > 0 else 0,
        )
        logger.debug(f"Text stats: {total_words} words, {sentences} sentences, {paragraphs} paragraphs")
        return stats

    def _own_text(self, node: Node) -> str:
        parts = []
        for child in node.children:
            if child.is_text:
                parts.append(child.text)
            elif child.is_element:
                if child.tag in self._content_tags:
                    # counted by the nested element itself
                    parts.append(" ")
                else:
                    parts.append(self._own_text(child))
        return "".join(parts)

    # --- Heading statistics ---

    def extract_heading_stats(self, tree: Optional[Node]) -> HeadingStats:
        titles_per_level = {level: [] for level in range(1, 7)}
        first_seen: List[int] = []

        if tree is not None:
            for node in tree.iter_elements():
                level = heading_level(node)
                if level is None:
                    continue
                text = node.get_text().strip()
                titles_per_level[level].append(HeadingTitle(
                    text=text,
                    length=len(text),
                    words=len(text.split()),
                ))
                if level not in first_seen:
                    first_seen.append(level)

        levels = {}
        for level, titles in titles_per_level.items():
            total_length = sum(title.length for title in titles)
            levels[f"h{level}"] = HeadingLevelStats(
                count=len(titles),
                titles=titles,
                total_length=total_length,
                avg_length=round_int(total_length / len(titles)) if titles else 0,
            )

        return HeadingStats(
            **levels,
            hierarchy=first_seen,
            valid_hierarchy=is_valid_hierarchy(first_seen),
            has_h1=levels["h1"].count > 0,
            has_h2=levels["h2"].count > 0,
        )


def count_sentences(text: str) -> int:
    """Fragments between runs of '.', '!' and '?' that contain more than whitespace."""
    return sum(1 for fragment in SENTENCE_SPLIT.split(text) if fragment.strip())


def heading_level(node: Node) -> Optional[int]:
    if len(node.tag) == 2 and node.tag[0] == 'h' and node.tag[1] in "123456":
        return int(node.tag[1])
    return None


def is_valid_hierarchy(levels: List[int]) -> bool:
    """
    Checks the levels in order of first appearance: going deeper by more than
    one step (h1 -> h3) breaks the hierarchy, going back up never does.
    """
    for previous, current in zip(levels, levels[1:]):
        if current > previous + 1:
            return False
    return True
