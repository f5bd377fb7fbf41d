# src/content_auditor/services/readability_service.py
import logging
from fractions import Fraction
from typing import Optional, Sequence

from content_auditor.config import ReadabilityConfig
from content_auditor.model import ReadabilityResult
from content_auditor.utils.math_utils import round_half_up, clamp

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

# Vowel alphabets keyed by primary language subtag
VOWELS = {
    "en": "aeiouy",
    "de": "aeiouyäöü",
    "nl": "aeiouyë",
    "fr": "aeiouyàâæéèêëîïôœùûü",
    "es": "aeiouáéíóúü",
    "it": "aeiouàèéìíîòóùú",
    "pt": "aeiouáàâãéêíóôõú",
    "pl": "aeiouyąęó",
    "ru": "аеёиоуыэюя",
    "uk": "аеєиіїоуюя",
}

# (inclusive upper fog bound, interpretation)
FOG_INTERPRETATIONS = [
    (6, "Very easy to read, suitable for a wide audience"),
    (8, "Easy to read, conversational style"),
    (10, "Fairly easy to read for most adults"),
    (12, "Standard text, comfortable for high school readers"),
    (14, "Fairly difficult, aimed at educated readers"),
    (17, "Difficult, college level reading"),
]
FOG_INTERPRETATION_HARDEST = "Very difficult, specialist or academic reading"
INSUFFICIENT_INTERPRETATION = "Not enough text to evaluate readability"


def resolve_language(lang: Optional[str]) -> str:
    """Maps a declared lang attribute ('en-GB', 'ru_RU') to a supported vowel alphabet key."""
    if not lang:
        return DEFAULT_LANGUAGE
    primary = lang.strip().lower().replace("_", "-").split("-")[0]
    return primary if primary in VOWELS else DEFAULT_LANGUAGE


def count_syllables(word: str, lang: Optional[str] = None) -> int:
    """
    Estimates the syllables of a single word.

    The word is lowercased and reduced to its alphabetic characters; every
    transition from a non-vowel to a vowel starts a syllable. A non-empty word
    without any vowel group still counts as one syllable.
    """
    vowels = VOWELS[resolve_language(lang)]
    cleaned = "".join(ch for ch in word.lower() if ch.isalpha())
    if not cleaned:
        return 0

    syllables = 0
    previous_is_vowel = False
    for ch in cleaned:
        is_vowel = ch in vowels
        if is_vowel and not previous_is_vowel:
            syllables += 1
        previous_is_vowel = is_vowel

    return max(syllables, 1)


class ReadabilityScorer:
    """
    Gunning-Fog style readability scoring.

    The fog index is mapped to a score through a fixed step table instead of a
    linear transform, so a heuristic index is never reported with more
    precision than it has.
    """

    def __init__(self, config: Optional[ReadabilityConfig] = None):
        self.config = config or ReadabilityConfig()

    def score(self, words: Sequence[str], sentence_count: int, lang: Optional[str] = None) -> ReadabilityResult:
        language = resolve_language(lang)
        if len(words) == 0 or sentence_count <= 0:
            return ReadabilityResult(language=language)

        total_words = len(words)
        avg_words_per_sentence = Fraction(total_words, sentence_count)

        complex_words = sum(
            1 for word in words
            if count_syllables(word, language) >= self.config.complex_word_syllables
        )
        complex_fraction = Fraction(complex_words, total_words)

        # exact: a fog index on a step bound must compare equal to it
        fog_index = Fraction(2, 5) * (avg_words_per_sentence + 100 * complex_fraction)
        score = self.score_from_fog(fog_index)
        avg_chars_per_word = sum(len(word) for word in words) / total_words

        logger.debug(f"Readability: fog={float(fog_index):.2f} score={score} ({language})")

        return ReadabilityResult(
            score=score,
            level=self.level_from_score(score),
            fog_index=round_half_up(float(fog_index), 2),
            avg_words_per_sentence=round_half_up(float(avg_words_per_sentence), 1),
            avg_chars_per_word=round_half_up(avg_chars_per_word, 1),
            complex_words_percentage=round_half_up(float(complex_fraction * 100), 1),
            complex_words_count=complex_words,
            total_sentences=sentence_count,
            total_words=total_words,
            interpretation=self.interpret_fog(fog_index),
            language=language,
        )

    def score_from_fog(self, fog_index: float) -> int:
        """Step table lookup; every bound is inclusive."""
        for upper_bound, step_score in self.config.fog_steps:
            if fog_index <= upper_bound:
                return clamp(step_score, 0, 100)
        return clamp(self.config.fallback_score, 0, 100)

    def level_from_score(self, score: int) -> str:
        for minimum, level in self.config.level_thresholds:
            if score >= minimum:
                return level
        return self.config.lowest_level

    @staticmethod
    def interpret_fog(fog_index: float) -> str:
        for upper_bound, text in FOG_INTERPRETATIONS:
            if fog_index <= upper_bound:
                return text
        return FOG_INTERPRETATION_HARDEST
