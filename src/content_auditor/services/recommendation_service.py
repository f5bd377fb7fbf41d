# src/content_auditor/services/recommendation_service.py
import logging
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from content_auditor.config import RecommendationConfig
from content_auditor.model import (
    Recommendation, TextStats, HeadingStats, ImageStats, LinkStats, ReadabilityResult,
    KeywordStats, MultimediaStats, SemanticStats, BreadcrumbStats,
)

logger = logging.getLogger(__name__)


class RecommendationContext(BaseModel):
    """All metrics a recommendation rule may inspect."""
    model_config = ConfigDict(frozen=True)

    text: TextStats
    headings: HeadingStats
    images: ImageStats
    links: LinkStats
    readability: ReadabilityResult
    keywords: KeywordStats
    multimedia: MultimediaStats
    semantics: SemanticStats
    breadcrumbs: BreadcrumbStats
    score: int


Rule = Callable[[RecommendationContext, RecommendationConfig], Optional[Recommendation]]


def recommendation_rule(rule_id: str):
    """
    Decorator to declare the stable recommendation id a rule function emits.
    """
    def decorator(func):
        func.rule_id = rule_id
        return func
    return decorator


# --- HEADING RULES ---

@recommendation_rule("content-no-h1")
def check_missing_h1(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.headings.h1.count > 0:
        return None
    return Recommendation(
        id="content-no-h1",
        title="Missing H1 heading",
        description="The page has no H1 heading. The H1 tells readers and search engines what the page is about.",
        suggestion="Add a single H1 heading at the start of the main content.",
        priority="critical",
        impact=9,
        category="headings",
        examples="<h1>Growing roses in a small garden</h1>",
    )


@recommendation_rule("content-multiple-h1")
def check_multiple_h1(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    count = ctx.headings.h1.count
    if count <= 1:
        return None
    return Recommendation(
        id="content-multiple-h1",
        title="Multiple H1 headings",
        description=f"Found {count} H1 headings. Several H1s blur the main topic of the page.",
        suggestion="Keep one H1 for the page title and turn the others into H2-H6 subheadings.",
        priority="warning",
        impact=7,
        category="headings",
    )


@recommendation_rule("content-no-h2")
def check_missing_h2(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.headings.has_h2:
        return None
    return Recommendation(
        id="content-no-h2",
        title="No H2 subheadings",
        description="H2 subheadings split the content into sections that are easy to scan.",
        suggestion="Structure the text with H2 subheadings for each logical section.",
        priority="warning",
        impact=6,
        category="headings",
        examples="<h2>Choosing a variety</h2><h2>Pruning</h2>",
    )


@recommendation_rule("content-invalid-heading-hierarchy")
def check_heading_hierarchy(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.headings.valid_hierarchy:
        return None
    order = " -> ".join(f"H{level}" for level in ctx.headings.hierarchy)
    return Recommendation(
        id="content-invalid-heading-hierarchy",
        title="Heading levels are skipped",
        description=f"Headings appear in the order {order}, skipping at least one level.",
        suggestion="Go one level deeper at a time (H1 -> H2 -> H3) without skipping levels.",
        priority="warning",
        impact=6,
        category="headings",
    )


# --- TEXT RULES ---

@recommendation_rule("content-low-word-count")
def check_word_count(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    words = ctx.text.content_words
    if words >= cfg.min_content_words:
        return None
    return Recommendation(
        id="content-low-word-count",
        title="Not enough text content",
        description=f"The page has {words} content words. At least {cfg.min_content_words} are recommended.",
        suggestion="Expand the content so it covers the topic of the page in depth.",
        priority="warning",
        impact=7,
        category="content",
        examples="Guides, descriptions, instructions, reviews",
    )


@recommendation_rule("content-few-paragraphs")
def check_paragraph_count(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    paragraphs = ctx.text.paragraphs
    if paragraphs >= cfg.min_paragraphs:
        return None
    return Recommendation(
        id="content-few-paragraphs",
        title="Too few paragraphs",
        description=f"Only {paragraphs} paragraph(s) found.",
        suggestion="Break the text into short paragraphs of a few sentences each.",
        priority="info",
        impact=4,
        category="content",
    )


@recommendation_rule("content-long-paragraphs")
def check_paragraph_length(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    length = ctx.text.avg_paragraph_length
    if length <= cfg.max_paragraph_length:
        return None
    return Recommendation(
        id="content-long-paragraphs",
        title="Paragraphs are very long",
        description=f"Paragraphs average {length} words.",
        suggestion="Split long paragraphs, use lists for enumerations.",
        priority="info",
        impact=3,
        category="content",
    )


# --- READABILITY RULES ---

@recommendation_rule("content-low-readability")
def check_readability(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    readability = ctx.readability
    if readability.total_words == 0 or readability.score >= cfg.min_readability_score:
        return None
    return Recommendation(
        id="content-low-readability",
        title="Text is hard to read",
        description=(
            f"Readability score {readability.score}/100 (fog index {readability.fog_index}). "
            f"{readability.interpretation}."
        ),
        suggestion="Use shorter sentences and simpler words, and break up long paragraphs.",
        priority="warning",
        impact=6,
        category="readability",
        examples="15-20 words per sentence, paragraphs of 3-4 sentences",
    )


@recommendation_rule("content-long-sentences")
def check_sentence_length(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    length = ctx.text.avg_sentence_length
    if length <= cfg.max_sentence_length:
        return None
    return Recommendation(
        id="content-long-sentences",
        title="Sentences are too long",
        description=f"Sentences average {length} words. More than {cfg.max_sentence_length} words is hard to follow.",
        suggestion="Split long sentences in two and remove filler words.",
        priority="warning",
        impact=5,
        category="readability",
    )


# --- KEYWORD RULES ---

@recommendation_rule("content-keyword-stuffing")
def check_keyword_stuffing(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    keywords = ctx.keywords
    if not keywords.top_words or keywords.total_words == 0:
        return None
    top = keywords.top_words[0]
    share = top.count / keywords.total_words
    if share <= cfg.keyword_stuffing_ratio:
        return None
    return Recommendation(
        id="content-keyword-stuffing",
        title="Possible keyword stuffing",
        description=f"The word '{top.word}' makes up {share * 100:.1f}% of the text.",
        suggestion="Use synonyms and related terms instead of repeating the same keyword.",
        priority="warning",
        impact=6,
        category="keywords",
    )


# --- IMAGE RULES ---

@recommendation_rule("content-no-images")
def check_no_images(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.images.total > 0:
        return None
    return Recommendation(
        id="content-no-images",
        title="No images on the page",
        description="Images make content more engaging and can rank in image search.",
        suggestion="Add relevant images with descriptive ALT text.",
        priority="info",
        impact=3,
        category="images",
    )


@recommendation_rule("content-images-no-alt")
def check_image_alt(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    images = ctx.images
    if images.total == 0 or images.alt_percentage >= cfg.min_alt_percentage:
        return None
    return Recommendation(
        id="content-images-no-alt",
        title="Images without ALT text",
        description=(
            f"Only {images.with_alt} of {images.total} images ({images.alt_percentage}%) have ALT text. "
            "ALT text matters for accessibility and image search."
        ),
        suggestion="Describe what each meaningful image shows in its ALT attribute.",
        priority="warning",
        impact=6,
        category="images",
        examples='<img src="rose.jpg" alt="Red climbing rose on a wooden fence">',
    )


@recommendation_rule("content-images-no-lazy")
def check_image_lazy_loading(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    images = ctx.images
    if images.total <= cfg.lazy_min_images or images.lazy_percentage >= cfg.min_lazy_percentage:
        return None
    return Recommendation(
        id="content-images-no-lazy",
        title="Few images use lazy loading",
        description=f"Only {images.lazy_percentage}% of {images.total} images are lazy-loaded.",
        suggestion="Add loading=\"lazy\" to images below the fold.",
        priority="warning",
        impact=5,
        category="images",
        examples='<img src="photo.jpg" loading="lazy" alt="...">',
    )


@recommendation_rule("content-images-no-dimensions")
def check_image_dimensions(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    images = ctx.images
    if images.total == 0 or images.dimensions_percentage >= cfg.min_dimensions_percentage:
        return None
    return Recommendation(
        id="content-images-no-dimensions",
        title="Images without width/height",
        description=f"Only {images.dimensions_percentage}% of images declare their dimensions, which causes layout shifts.",
        suggestion="Set width and height attributes on images.",
        priority="info",
        impact=4,
        category="images",
    )


# --- LINK RULES ---

@recommendation_rule("content-broken-links")
def check_broken_links(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    broken = ctx.links.broken
    if broken == 0:
        return None
    return Recommendation(
        id="content-broken-links",
        title="Links without anchor text",
        description=f"{broken} link(s) have no text and no image, so their target is unclear.",
        suggestion="Give every link descriptive anchor text.",
        priority="warning",
        impact=6,
        category="links",
    )


@recommendation_rule("content-no-internal-links")
def check_internal_links(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.links.internal > 0:
        return None
    return Recommendation(
        id="content-no-internal-links",
        title="No internal links",
        description="Internal links spread authority across the site and help navigation.",
        suggestion="Link to related pages of the same site.",
        priority="warning",
        impact=5,
        category="links",
    )


@recommendation_rule("content-external-nofollow")
def check_external_nofollow(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    links = ctx.links
    if links.external == 0 or links.nofollow_percentage >= cfg.min_nofollow_percentage:
        return None
    return Recommendation(
        id="content-external-nofollow",
        title="External links without nofollow",
        description=f"{links.nofollow_percentage}% of {links.external} external links use rel=\"nofollow\".",
        suggestion="Mark sponsored or untrusted external links with rel=\"nofollow\" or rel=\"sponsored\".",
        priority="info",
        impact=3,
        category="links",
    )


# --- STRUCTURE RULES ---

@recommendation_rule("content-no-semantic-elements")
def check_semantic_elements(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.semantics.total_elements > 0:
        return None
    return Recommendation(
        id="content-no-semantic-elements",
        title="No semantic HTML5 elements",
        description="The page uses none of header, nav, main, article, section, aside or footer.",
        suggestion="Wrap page regions in semantic elements.",
        priority="warning",
        impact=5,
        category="structure",
        examples="<header>...</header><main><article>...</article></main><footer>...</footer>",
    )


@recommendation_rule("content-no-breadcrumbs")
def check_breadcrumbs(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.breadcrumbs.exists:
        return None
    return Recommendation(
        id="content-no-breadcrumbs",
        title="No breadcrumbs",
        description="Breadcrumbs show where the page sits in the site and can appear in search results.",
        suggestion="Add a breadcrumb trail, ideally with BreadcrumbList markup.",
        priority="info",
        impact=3,
        category="structure",
        examples='<nav aria-label="breadcrumb">...</nav>',
    )


@recommendation_rule("content-no-multimedia")
def check_multimedia(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.multimedia.total > 0 or ctx.text.content_words < cfg.min_content_words:
        return None
    return Recommendation(
        id="content-no-multimedia",
        title="No video or audio",
        description="Long-form content without any video, audio or embed.",
        suggestion="Consider embedding a video or other media that supports the text.",
        priority="info",
        impact=2,
        category="multimedia",
    )


# --- SUMMARY ---

@recommendation_rule("content-excellent")
def check_excellent(ctx: RecommendationContext, cfg: RecommendationConfig) -> Optional[Recommendation]:
    if ctx.score < cfg.excellent_score:
        return None
    return Recommendation(
        id="content-excellent",
        title="Content is well optimised",
        description=f"The content scores {ctx.score}/100.",
        suggestion="Keep the content up to date and monitor it regularly.",
        priority="info",
        impact=1,
        category="summary",
    )


# Evaluation order; also the final tie-break for equal priority and impact
RULES: List[Rule] = [
    check_missing_h1,
    check_multiple_h1,
    check_missing_h2,
    check_heading_hierarchy,
    check_word_count,
    check_paragraph_count,
    check_paragraph_length,
    check_readability,
    check_sentence_length,
    check_keyword_stuffing,
    check_no_images,
    check_image_alt,
    check_image_lazy_loading,
    check_image_dimensions,
    check_broken_links,
    check_internal_links,
    check_external_nofollow,
    check_semantic_elements,
    check_breadcrumbs,
    check_multimedia,
    check_excellent,
]


class RecommendationEngine:
    """
    Applies the rule table to a metrics bundle and ranks the findings:
    priority first (critical, warning, info), then impact descending, then
    rule order. Holds no state between calls.
    """

    def __init__(self, config: Optional[RecommendationConfig] = None, rules: Optional[List[Rule]] = None):
        self.config = config or RecommendationConfig()
        self.rules = list(rules) if rules is not None else list(RULES)

    @property
    def rule_ids(self) -> List[str]:
        return [rule.rule_id for rule in self.rules]

    def generate(self, text: TextStats, headings: HeadingStats, images: ImageStats, links: LinkStats,
                 readability: ReadabilityResult, keywords: KeywordStats, multimedia: MultimediaStats,
                 semantics: SemanticStats, breadcrumbs: BreadcrumbStats, score: int) -> List[Recommendation]:
        context = RecommendationContext(
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
        return self.generate_for(context)

    def generate_for(self, context: RecommendationContext) -> List[Recommendation]:
        findings = []
        for rule in self.rules:
            recommendation = rule(context, self.config)
            if recommendation is not None:
                logger.debug(f"Rule {rule.rule_id} triggered")
                findings.append(recommendation)
        return rank(findings)


def rank(recommendations: List[Recommendation]) -> List[Recommendation]:
    """Stable two-key sort: priority rank ascending, impact descending."""
    return sorted(recommendations, key=lambda rec: (rec.priority_rank, -rec.impact))
