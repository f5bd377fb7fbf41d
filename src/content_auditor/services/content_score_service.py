# src/content_auditor/services/content_score_service.py
from typing import Optional

from content_auditor.config import ScoreConfig
from content_auditor.model import ImageStats, TextStats, HeadingStats, LinkStats, ReadabilityResult
from content_auditor.utils.math_utils import clamp


class ContentScoreAggregator:
    """
    Additive points over five buckets. Every predicate is all-or-nothing:

    - images (max 20): +15 ALT coverage > 80%, +5 lazy-load coverage > 50%
    - text (max 30): +20 content words > 300, +10 paragraphs > 3
    - headings (max 20): +5 exactly one H1, +5 any H2, +10 valid hierarchy
    - links (max 15): +10 broken links < 10%, +5 any internal link
    - readability (max 15): +15 readability score > 60
    """

    def __init__(self, config: Optional[ScoreConfig] = None):
        self.config = config or ScoreConfig()

    def aggregate(self, images: ImageStats, text: TextStats, headings: HeadingStats,
                  links: LinkStats, readability: ReadabilityResult) -> int:
        score = (
            self.image_points(images)
            + self.text_points(text)
            + self.heading_points(headings)
            + self.link_points(links)
            + self.readability_points(readability)
        )
        return clamp(score, 0, 100)

    def image_points(self, images: ImageStats) -> int:
        points = 0
        if images.alt_percentage > self.config.alt_percentage:
            points += 15
        if images.lazy_percentage > self.config.lazy_percentage:
            points += 5
        return points

    def text_points(self, text: TextStats) -> int:
        points = 0
        if text.content_words > self.config.content_words:
            points += 20
        if text.paragraphs > self.config.paragraphs:
            points += 10
        return points

    def heading_points(self, headings: HeadingStats) -> int:
        points = 0
        if headings.h1.count == 1:
            points += 5
        if headings.has_h2:
            points += 5
        if headings.valid_hierarchy:
            points += 10
        return points

    def link_points(self, links: LinkStats) -> int:
        points = 0
        if links.broken_percentage < self.config.broken_percentage:
            points += 10
        if links.internal > 0:
            points += 5
        return points

    def readability_points(self, readability: ReadabilityResult) -> int:
        return 15 if readability.score > self.config.readability_score else 0
