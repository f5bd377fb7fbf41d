# src/content_auditor/services/keyword_service.py
import string
from collections import Counter
from typing import Optional, Set

from content_auditor.config import KeywordConfig
from content_auditor.model import KeywordStats, KeywordCount
from content_auditor.utils.vocabulary import with_technical_vocabulary

# ASCII punctuation plus the typographic quotes and dashes common in prose
EDGE_PUNCTUATION = string.punctuation + "«»„“”‘’…—–·"


class KeywordMiner:
    """
    Word frequency over sanitized text, without stemming or stopword removal.
    Short tokens and technical vocabulary are excluded before counting.
    """

    def __init__(self, config: Optional[KeywordConfig] = None):
        self.config = config or KeywordConfig()

    @with_technical_vocabulary
    def mine(self, text: str, vocabulary: Set[str]) -> KeywordStats:
        """
        Builds the keyword distribution of `text`.

        Args:
            text (str): Sanitized page text.
            vocabulary (Set[str]): Technical words to exclude (injected by decorator).

        Returns:
            KeywordStats: Top words by count (ties keep first-seen order), unique and total counts.
        """
        if not text:
            return KeywordStats()

        counts: Counter = Counter()
        filtered = False
        for token in text.lower().split():
            word = token.strip(EDGE_PUNCTUATION)
            if len(word) < self.config.min_length:
                continue
            if word in vocabulary:
                filtered = True
                continue
            counts[word] += 1

        # most_common sorts stably, so equal counts stay in insertion order
        top_words = [KeywordCount(word=word, count=count) for word, count in counts.most_common(self.config.top_n)]

        return KeywordStats(
            top_words=top_words,
            unique_words=len(counts),
            total_words=sum(counts.values()),
            filtered=filtered,
        )
