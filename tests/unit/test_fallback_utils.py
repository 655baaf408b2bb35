"""
Unit tests for manual (non-AI) categorization.
"""

import pytest

from bookmark_extractor.fallback_utils import (
    NO_SUMMARY,
    build_summary,
    build_tags,
    calculate_reading_time,
    categorize,
    count_keywords,
    estimate_difficulty,
    manual_analysis,
)
from bookmark_extractor.models import Category, Difficulty, Platform


def words(n: int) -> str:
    return ' '.join(['word'] * n)


class TestCategorize:
    """Tests for categorize()"""

    @pytest.mark.parametrize("url,expected", [
        ("https://www.youtube.com/watch?v=abc", Category.VIDEOS),
        ("https://vimeo.com/123", Category.VIDEOS),
        ("https://github.com/user/repo", Category.CODING),
        ("https://stackoverflow.com/questions/1", Category.CODING),
        ("https://www.amazon.com/dp/B00123", Category.SHOPPING),
        ("https://www.ebay.com/itm/1", Category.SHOPPING),
        ("https://arxiv.org/abs/1706.03762", Category.RESEARCH),
    ])
    def test_url_patterns(self, url, expected):
        assert categorize(url, "") == expected

    def test_url_beats_keywords(self):
        text = "abstract study research journal findings"
        assert categorize("https://github.com/user/repo", text) == Category.CODING

    def test_keywords(self):
        text = "This study reports research findings from an experiment."
        assert categorize("https://example.com/post", text) == Category.RESEARCH

    def test_too_few_hits_defaults_to_articles(self):
        assert categorize("https://example.com/post", "A short python note.") == Category.ARTICLES

    def test_empty(self):
        assert categorize("", "") == Category.ARTICLES

    def test_keywords_match_whole_words(self):
        # "apiary" and "coder" do not count as "api" and "code"
        assert count_keywords("apiary coder api", ['api', 'code']) == 1


class TestReadingTime:
    """Tests for calculate_reading_time()"""

    def test_floor_of_one_minute(self):
        assert calculate_reading_time("") == 1
        assert calculate_reading_time("one") == 1

    def test_rounds_up(self):
        assert calculate_reading_time(words(200)) == 1
        assert calculate_reading_time(words(201)) == 2
        assert calculate_reading_time(words(1000)) == 5

    def test_monotonic_in_word_count(self):
        previous = 0
        for n in range(0, 2500, 37):
            minutes = calculate_reading_time(words(n))
            assert minutes >= previous
            assert minutes >= 1
            previous = minutes


class TestEstimateDifficulty:
    """Tests for estimate_difficulty()"""

    @pytest.mark.parametrize("count,expected", [
        (0, Difficulty.EASY),
        (799, Difficulty.EASY),
        (800, Difficulty.MEDIUM),
        (1499, Difficulty.MEDIUM),
        (1500, Difficulty.ADVANCED),
    ])
    def test_thresholds(self, count, expected):
        assert estimate_difficulty(words(count)) == expected


class TestBuildTags:
    """Tests for build_tags()"""

    def test_category_and_platform(self):
        assert build_tags(Category.CODING, Platform.GITHUB, "", 1) == ['coding', 'github']

    def test_generic_platform_not_tagged(self):
        assert build_tags(Category.ARTICLES, Platform.GENERIC, "", 1) == ['articles']

    def test_long_read(self):
        assert 'long-read' in build_tags(Category.ARTICLES, Platform.GENERIC, "", 11)
        assert 'long-read' not in build_tags(Category.ARTICLES, Platform.GENERIC, "", 10)

    def test_tutorial(self):
        tags = build_tags(Category.CODING, Platform.GENERIC, "How to set up pytest, step by step", 2)
        assert tags == ['coding', 'tutorial']

    def test_no_duplicates(self):
        tags = build_tags(Category.VIDEOS, Platform.YOUTUBE, "tutorial", 30)
        assert len(tags) == len(set(tags))
        assert len(tags) <= 5


class TestBuildSummary:
    """Tests for build_summary()"""

    def test_description_wins(self):
        assert build_summary("The description.", "Some text.") == "The description."

    def test_first_sentences(self):
        text = "First sentence. Second sentence. " + "Long filler. " * 50
        summary = build_summary("", text)
        assert summary.startswith("First sentence. Second sentence.")
        assert len(summary) <= 280

    def test_nothing_available(self):
        assert build_summary("", "") == NO_SUMMARY


class TestManualAnalysis:
    """Tests for manual_analysis()"""

    def test_youtube(self):
        result = manual_analysis("https://www.youtube.com/watch?v=abc", Platform.YOUTUBE, "A video", "")
        assert result == {
            'summary': 'A video',
            'category': 'Videos',
            'difficulty': 'Easy',
            'readingTime': '1 min',
            'tags': ['videos', 'youtube'],
        }

    def test_long_article(self):
        result = manual_analysis("https://example.com/post", Platform.GENERIC, "", words(2400))
        assert result['readingTime'] == '12 min'
        assert result['difficulty'] == 'Advanced'
        assert result['category'] == 'Articles'
        assert 'long-read' in result['tags']
