# tests/services/test_text_metrics_service.py
import pytest

from content_auditor.dom.builder import DOMBuilder
from content_auditor.services.text_metrics_service import (
    MetricsExtractor, count_sentences, is_valid_hierarchy,
)


@pytest.fixture
def extractor():
    return MetricsExtractor()


@pytest.fixture
def body():
    builder = DOMBuilder()
    return lambda html: builder.parse_doc("", f"<html><body>{html}</body></html>").body


def test_nested_content_is_counted_once(extractor, body):
    """Tekst van een <p> binnen een <article> telt maar een keer mee."""
    stats = extractor.extract_text_stats(body(
        "<article><p>Een twee drie.</p><p>Vier vijf.</p></article>"
    ))
    assert stats.total_words == 5
    assert stats.sentences == 2
    assert stats.paragraphs == 2
    assert stats.avg_sentence_length == 3


def test_inline_children_belong_to_their_block(extractor, body):
    """Niet-gewhiteliste kinderen (<strong>) horen bij het omliggende blok."""
    words, sentences = extractor.extract_words(body("<p>Tekst met <strong>nadruk</strong> hier.</p>"))
    assert words == ["Tekst", "met", "nadruk", "hier."]
    assert sentences == 1


def test_text_outside_whitelist_is_ignored(extractor, body):
    stats = extractor.extract_text_stats(body("<div>Losse tekst</div><span>meer</span><p>Wel dit.</p>"))
    assert stats.total_words == 2


def test_content_words_need_a_letter(extractor, body):
    """Getallen en losse tekens tellen als woord maar niet als inhoudswoord."""
    stats = extractor.extract_text_stats(body("<p>Prijs 25 euro !</p>"))
    assert stats.total_words == 4
    assert stats.content_words == 2
    assert stats.sentences == 1


def test_structure_counts_and_reading_time(extractor, body):
    words = " ".join(["woord"] * 201)
    stats = extractor.extract_text_stats(body(
        f"<p>{words}.</p><ul><li>a</li></ul><ol><li>b</li></ol><table><tr><td>c</td></tr></table>"
    ))
    assert stats.lists == 2
    assert stats.tables == 1
    assert stats.paragraphs == 1
    assert stats.total_words == 204
    assert stats.reading_time_minutes == 2
    assert stats.total_chars == len(words) + 1 + 3


def test_stats_are_consistent(extractor, body):
    """contentWords <= totalWords en zinnen > 0 zodra er woorden zijn."""
    stats = extractor.extract_text_stats(body("<h1>Rozen 2024</h1><p>Snoei in maart. Mest in mei!</p>"))
    assert stats.content_words <= stats.total_words
    assert stats.sentences > 0
    assert stats.total_chars > 0


def test_empty_tree(extractor):
    stats = extractor.extract_text_stats(None)
    assert stats.total_words == 0
    assert stats.avg_sentence_length == 0
    assert extractor.extract_words(None) == ([], 0)


def test_technical_blocks_are_skipped(extractor, body):
    stats = extractor.extract_text_stats(body("<p>const a = 1;</p><p>Gewone tekst.</p>"))
    assert stats.total_words == 2
    assert stats.paragraphs == 2


@pytest.mark.parametrize("text, expected", [
    ("Een. Twee! Drie?", 3),
    ("Wat?! Echt...", 2),
    ("Zonder punt", 1),
    ("   ", 0),
    ("...", 0),
])
def test_count_sentences(text, expected):
    assert count_sentences(text) == expected


# --- Headings ---

def test_h1_with_three_h2_is_valid(extractor, body):
    """H1 x1, H2 x3 en geen H3: de hiërarchie is geldig."""
    stats = extractor.extract_heading_stats(body(
        "<h1>Rozen</h1><h2>Soorten</h2><p>x</p><h2>Snoeien</h2><h2>Bemesten</h2>"
    ))
    assert stats.has_h1
    assert stats.has_h2
    assert stats.h1.count == 1
    assert stats.h2.count == 3
    assert stats.h3.count == 0
    assert stats.hierarchy == [1, 2]
    assert stats.valid_hierarchy


def test_skipped_level_is_invalid(extractor, body):
    stats = extractor.extract_heading_stats(body("<h1>A</h1><h2>B</h2><h4>C</h4>"))
    assert stats.hierarchy == [1, 2, 4]
    assert not stats.valid_hierarchy


def test_heading_titles(extractor, body):
    stats = extractor.extract_heading_stats(body("<h2> Rozen snoeien </h2><h2>Mest</h2>"))
    titles = stats.level(2).titles
    assert [t.text for t in titles] == ["Rozen snoeien", "Mest"]
    assert titles[0].words == 2
    assert stats.h2.total_length == 17
    assert stats.h2.avg_length == 9
    assert not stats.has_h1


@pytest.mark.parametrize("levels, valid", [
    ([], True),
    ([1], True),
    ([1, 2, 3], True),
    ([1, 2, 4], False),
    ([1, 3], False),
    ([2, 1, 2, 3], True),
    ([1, 2, 3, 2, 1], True),
])
def test_is_valid_hierarchy(levels, valid):
    assert is_valid_hierarchy(levels) is valid
