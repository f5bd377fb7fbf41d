# src/content_auditor/services/content_engine.py
import logging
from typing import Optional

from content_auditor.config import AnalysisConfig
from content_auditor.dom.builder import DOMBuilder
from content_auditor.dom.models import HTMLDocument
from content_auditor.dom.sanitizer import DocumentSanitizer
from content_auditor.dom.technical_filter import TechnicalContentFilter
from content_auditor.model import ContentAnalysisResult
from content_auditor.services.content_score_service import ContentScoreAggregator
from content_auditor.services.element_stats_service import ElementStatsService
from content_auditor.services.keyword_service import KeywordMiner
from content_auditor.services.readability_service import ReadabilityScorer
from content_auditor.services.recommendation_service import RecommendationEngine
from content_auditor.services.text_metrics_service import MetricsExtractor

logger = logging.getLogger(__name__)


class ContentEngine:
    """
    Content quality engine: one call analyses one document.

    The steps run strictly in sequence (sanitize -> extract -> score -> recommend)
    on a sanitized copy of the tree; the caller's document is never modified and
    nothing is retained between calls.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

        technical_filter = TechnicalContentFilter(self.config.sanitizer.extra_technical_patterns)
        self.sanitizer = DocumentSanitizer(self.config.sanitizer, technical_filter)
        self.metrics = MetricsExtractor(self.config.text, technical_filter)
        self.readability = ReadabilityScorer(self.config.readability)
        self.keywords = KeywordMiner(self.config.keywords)
        self.elements = ElementStatsService()
        self.aggregator = ContentScoreAggregator(self.config.score)
        self.recommendations = RecommendationEngine(self.config.recommendations)

    def analyze_html(self, url: str, html: str) -> ContentAnalysisResult:
        """Parses raw markup and analyses the resulting document."""
        doc = DOMBuilder().parse_doc(url, html)
        return self.analyze(doc)

    def analyze(self, doc: HTMLDocument) -> ContentAnalysisResult:
        """
        Runs the full content analysis on a parsed document.

        Args:
            doc (HTMLDocument): The parsed document; its tree is left untouched.

        Returns:
            ContentAnalysisResult: Metrics, score and ranked recommendations.
        """
        # --- 1. Sanitize ---
        sanitized = self.sanitizer.sanitize_document(doc)
        body = sanitized.body

        # --- 2. Extract ---
        text = self.metrics.extract_text_stats(body)
        headings = self.metrics.extract_heading_stats(body)
        words, sentence_count = self.metrics.extract_words(body)
        keyword_text = body.get_text(" ", strip=True) if body is not None else ""
        keywords = self.keywords.mine(keyword_text)

        images = self.elements.analyze_images(body)
        links = self.elements.analyze_links(body, doc.origin)
        multimedia = self.elements.analyze_multimedia(body)
        semantics = self.elements.analyze_semantics(body)
        structure = self.elements.analyze_structure(semantics)
        breadcrumbs = self.elements.analyze_breadcrumbs(body)

        # --- 3. Score ---
        readability = self.readability.score(words, sentence_count, doc.lang)
        score = self.aggregator.aggregate(images, text, headings, links, readability)

        # --- 4. Recommend ---
        recommendations = self.recommendations.generate(
            text=text,
            headings=headings,
            images=images,
            links=links,
            readability=readability,
            keywords=keywords,
            multimedia=multimedia,
            semantics=semantics,
            breadcrumbs=breadcrumbs,
            score=score,
        )

        logger.debug(f"Content analysis of {doc.raw_url or '<inline>'}: score {score}, "
                     f"{len(recommendations)} recommendations")

        return ContentAnalysisResult(
            url=doc.raw_url,
            text=text,
            headings=headings,
            readability=readability,
            keywords=keywords,
            images=images,
            links=links,
            multimedia=multimedia,
            semantics=semantics,
            breadcrumbs=breadcrumbs,
            structure=structure,
            score=score,
            recommendations=recommendations,
        )
