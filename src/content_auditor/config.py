# src/content_auditor/config.py
"""
Threshold constants of the content analysis, grouped per component.

Every value defaults to the standard audit behaviour; a
settings file may override any of them (see ConfigManager).
"""
from typing import List, Tuple
from pydantic import BaseModel, Field


class SanitizerConfig(BaseModel):
    exclusion_attributes: List[str] = Field(
        default_factory=lambda: ["data-seo-exclude", "data-noindex", "data-nosnippet"])
    exclusion_classes: List[str] = Field(
        default_factory=lambda: ["seo-exclude", "seo-ignore", "noindex", "no-index"])
    exclusion_tags: List[str] = Field(default_factory=lambda: ["noindex"])
    # Keywords recognised in robots-style markers and comment directives
    exclusion_keywords: List[str] = Field(default_factory=lambda: ["noindex", "seo-exclude"])
    technical_tags: List[str] = Field(
        default_factory=lambda: ["script", "style", "noscript", "template", "code", "pre", "kbd", "samp"])
    important_tags: List[str] = Field(default_factory=lambda: ["article", "main"])
    important_roles: List[str] = Field(default_factory=lambda: ["main", "article"])
    important_classes: List[str] = Field(default_factory=lambda: [
        "content", "main-content", "entry-content", "post-content",
        "article-content", "article-body", "post-body",
    ])
    # Additional regular expressions appended to the built-in technical patterns
    extra_technical_patterns: List[str] = Field(default_factory=list)


class TextConfig(BaseModel):
    content_tags: List[str] = Field(default_factory=lambda: [
        "p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "td", "th",
        "article", "section", "main", "blockquote", "figcaption",
    ])
    words_per_minute: int = Field(default=200, gt=0)


class ReadabilityConfig(BaseModel):
    # (inclusive upper fog bound, score); anything above the last bound gets fallback_score
    fog_steps: List[Tuple[float, int]] = Field(default_factory=lambda: [
        (6, 95), (8, 85), (10, 75), (12, 65), (14, 55), (16, 45), (18, 35),
    ])
    fallback_score: int = 25
    complex_word_syllables: int = 3
    # (minimum score, level); first match wins
    level_thresholds: List[Tuple[int, str]] = Field(default_factory=lambda: [
        (80, "very_easy"), (60, "easy"), (40, "moderate"), (20, "difficult"),
    ])
    lowest_level: str = "very_difficult"


class KeywordConfig(BaseModel):
    min_length: int = 4
    top_n: int = Field(default=10, ge=1, le=10)


class RecommendationConfig(BaseModel):
    min_alt_percentage: int = 80
    min_lazy_percentage: int = 50
    lazy_min_images: int = 5
    min_dimensions_percentage: int = 50
    min_nofollow_percentage: int = 10
    min_content_words: int = 300
    min_paragraphs: int = 3
    max_paragraph_length: int = 150
    min_readability_score: int = 60
    max_sentence_length: int = 20
    keyword_stuffing_ratio: float = 0.05
    excellent_score: int = 80


class ScoreConfig(BaseModel):
    alt_percentage: int = 80
    lazy_percentage: int = 50
    content_words: int = 300
    paragraphs: int = 3
    broken_percentage: int = 10
    readability_score: int = 60


class AnalysisConfig(BaseModel):
    sanitizer: SanitizerConfig = Field(default_factory=SanitizerConfig)
    text: TextConfig = Field(default_factory=TextConfig)
    readability: ReadabilityConfig = Field(default_factory=ReadabilityConfig)
    keywords: KeywordConfig = Field(default_factory=KeywordConfig)
    recommendations: RecommendationConfig = Field(default_factory=RecommendationConfig)
    score: ScoreConfig = Field(default_factory=ScoreConfig)
