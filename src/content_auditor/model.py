# src/content_auditor/model.py
from typing import Optional, List, Dict, Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Priority = Literal["critical", "warning", "info"]

PRIORITY_RANK: Dict[str, int] = {"critical": 0, "warning": 1, "info": 2}


class ResultModel(BaseModel):
    """
    Base for all analysis records: immutable once built, serialised with
    camelCase keys (model_dump(by_alias=True)) for report consumers.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TextStats(ResultModel):
    total_chars: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    content_words: int = Field(default=0, ge=0)
    sentences: int = Field(default=0, ge=0)
    paragraphs: int = Field(default=0, ge=0)
    lists: int = Field(default=0, ge=0)
    tables: int = Field(default=0, ge=0)
    reading_time_minutes: int = Field(default=0, ge=0)
    avg_sentence_length: int = Field(default=0, ge=0)
    avg_paragraph_length: int = Field(default=0, ge=0)


class HeadingTitle(ResultModel):
    text: str
    length: int = Field(ge=0)
    words: int = Field(ge=0)


class HeadingLevelStats(ResultModel):
    count: int = Field(default=0, ge=0)
    titles: List[HeadingTitle] = Field(default_factory=list)
    total_length: int = Field(default=0, ge=0)
    avg_length: int = Field(default=0, ge=0)


class HeadingStats(ResultModel):
    h1: HeadingLevelStats = Field(default_factory=HeadingLevelStats)
    h2: HeadingLevelStats = Field(default_factory=HeadingLevelStats)
    h3: HeadingLevelStats = Field(default_factory=HeadingLevelStats)
    h4: HeadingLevelStats = Field(default_factory=HeadingLevelStats)
    h5: HeadingLevelStats = Field(default_factory=HeadingLevelStats)
    h6: HeadingLevelStats = Field(default_factory=HeadingLevelStats)
    hierarchy: List[int] = Field(default_factory=list)
    valid_hierarchy: bool = True
    has_h1: bool = False
    has_h2: bool = False

    def level(self, level: int) -> HeadingLevelStats:
        return getattr(self, f"h{level}")


class ReadabilityResult(ResultModel):
    score: int = Field(default=0, ge=0, le=100)
    level: str = "insufficient"
    fog_index: float = Field(default=0.0, ge=0)
    avg_words_per_sentence: float = Field(default=0.0, ge=0)
    avg_chars_per_word: float = Field(default=0.0, ge=0)
    complex_words_percentage: float = Field(default=0.0, ge=0, le=100)
    complex_words_count: int = Field(default=0, ge=0)
    total_sentences: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    interpretation: str = "Not enough text to evaluate readability"
    language: str = "en"


class KeywordCount(ResultModel):
    word: str
    count: int = Field(ge=1)


class KeywordStats(ResultModel):
    top_words: List[KeywordCount] = Field(default_factory=list, max_length=10)
    unique_words: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    filtered: bool = False


class ImageStats(ResultModel):
    total: int = Field(default=0, ge=0)
    with_alt: int = Field(default=0, ge=0)
    with_dimensions: int = Field(default=0, ge=0)
    lazy_loaded: int = Field(default=0, ge=0)
    large_images: int = Field(default=0, ge=0)
    alt_percentage: int = Field(default=100, ge=0, le=100)
    dimensions_percentage: int = Field(default=100, ge=0, le=100)
    lazy_percentage: int = Field(default=0, ge=0, le=100)
    formats: Dict[str, int] = Field(default_factory=dict)


class LinkStats(ResultModel):
    total: int = Field(default=0, ge=0)
    internal: int = Field(default=0, ge=0)
    external: int = Field(default=0, ge=0)
    with_title: int = Field(default=0, ge=0)
    with_nofollow: int = Field(default=0, ge=0)
    broken: int = Field(default=0, ge=0)
    title_percentage: int = Field(default=100, ge=0, le=100)
    nofollow_percentage: int = Field(default=0, ge=0, le=100)
    broken_percentage: int = Field(default=0, ge=0, le=100)
    types: Dict[str, int] = Field(default_factory=dict)


class EmbeddedContent(ResultModel):
    type: str
    src: str


class MultimediaStats(ResultModel):
    videos: int = Field(default=0, ge=0)
    audios: int = Field(default=0, ge=0)
    iframes: int = Field(default=0, ge=0)
    embedded_content: List[EmbeddedContent] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.videos + self.audios + self.iframes


class SemanticStats(ResultModel):
    header: int = Field(default=0, ge=0)
    nav: int = Field(default=0, ge=0)
    main: int = Field(default=0, ge=0)
    footer: int = Field(default=0, ge=0)
    article: int = Field(default=0, ge=0)
    section: int = Field(default=0, ge=0)
    aside: int = Field(default=0, ge=0)
    figure: int = Field(default=0, ge=0)
    figcaption: int = Field(default=0, ge=0)
    total_elements: int = Field(default=0, ge=0)


class BreadcrumbStats(ResultModel):
    exists: bool = False
    elements: int = Field(default=0, ge=0)


class StructureStats(ResultModel):
    has_header: bool = False
    has_nav: bool = False
    has_main: bool = False
    has_footer: bool = False


class Recommendation(ResultModel):
    """A single actionable finding, ranked by priority and impact."""
    id: str
    title: str
    description: str
    suggestion: str
    priority: Priority
    impact: int = Field(ge=1, le=10)
    category: str
    examples: Optional[str] = None

    @property
    def priority_rank(self) -> int:
        return PRIORITY_RANK[self.priority]


class ContentAnalysisResult(ResultModel):
    """
    Aggregated outcome of one content analysis call.
    """
    url: str = ""
    text: TextStats = Field(default_factory=TextStats)
    headings: HeadingStats = Field(default_factory=HeadingStats)
    readability: ReadabilityResult = Field(default_factory=ReadabilityResult)
    keywords: KeywordStats = Field(default_factory=KeywordStats)
    images: ImageStats = Field(default_factory=ImageStats)
    links: LinkStats = Field(default_factory=LinkStats)
    multimedia: MultimediaStats = Field(default_factory=MultimediaStats)
    semantics: SemanticStats = Field(default_factory=SemanticStats)
    breadcrumbs: BreadcrumbStats = Field(default_factory=BreadcrumbStats)
    structure: StructureStats = Field(default_factory=StructureStats)
    score: int = Field(default=0, ge=0, le=100)
    recommendations: List[Recommendation] = Field(default_factory=list)
    fallback: bool = False

    @classmethod
    def fallback_for(cls, url: str) -> "ContentAnalysisResult":
        """Static substitute used by orchestrators when an analysis fails."""
        return cls(url=url, fallback=True)
