"""
Manual (non-AI) categorization used when Gemini is unavailable.

All functions are pure and deterministic so the fallback result is stable for
a given page.
"""

import math
import re
from typing import Dict, List

from .config import WORDS_PER_MINUTE
from .models import Category, Difficulty, Platform
from .text_utils import first_sentences, word_count

# URL substrings decide the category before any keyword counting
URL_CATEGORY_PATTERNS = [
    (Category.VIDEOS, ['youtube.com', 'youtu.be', 'vimeo.com', 'twitch.tv', 'tiktok.com']),
    (Category.CODING, ['github.com', 'gitlab.com', 'stackoverflow.com', 'bitbucket.org', 'npmjs.com', 'pypi.org']),
    (Category.SHOPPING, ['amazon', 'amzn', 'ebay', 'etsy.com', 'aliexpress', 'walmart.com']),
    (Category.RESEARCH, ['arxiv.org', 'doi.org', 'scholar.google', 'researchgate.net', 'pubmed', 'nature.com/articles']),
]

# Keyword lists for page text; order breaks ties
CATEGORY_KEYWORDS = {
    Category.RESEARCH: [
        'abstract', 'study', 'research', 'journal', 'hypothesis', 'methodology',
        'findings', 'peer-reviewed', 'dataset', 'experiment', 'citation', 'et al',
    ],
    Category.CODING: [
        'function', 'code', 'api', 'programming', 'javascript', 'python', 'repository',
        'developer', 'npm', 'install', 'compile', 'github', 'library', 'framework',
    ],
    Category.SHOPPING: [
        'price', 'buy', 'add to cart', 'shipping', 'in stock', 'discount', 'checkout',
        'order now', 'free delivery', 'customer reviews',
    ],
    Category.VIDEOS: [
        'video', 'watch', 'subscribe', 'episode', 'livestream', 'views',
    ],
}

# Fewer keyword hits than this leaves the default category
MIN_KEYWORD_HITS = 3

EASY_WORD_LIMIT = 800
MEDIUM_WORD_LIMIT = 1500
LONG_READ_MINUTES = 10
MAX_TAGS = 5
SUMMARY_MAX_CHARS = 280
NO_SUMMARY = 'No summary available.'

TUTORIAL_PHRASES = ['how to', 'step-by-step', 'step by step', 'tutorial', 'walkthrough', 'getting started', 'beginner']


def count_keywords(text: str, keywords: List[str]) -> int:
    lowered = (text or '').lower()
    return sum(len(re.findall(r'\b' + re.escape(keyword) + r'\b', lowered)) for keyword in keywords)


def categorize(url: str, text: str) -> Category:
    """URL substrings first, then the keyword list with the most hits."""
    lowered_url = (url or '').lower()
    for category, patterns in URL_CATEGORY_PATTERNS:
        if any(pattern in lowered_url for pattern in patterns):
            return category

    best_category = Category.ARTICLES
    best_hits = MIN_KEYWORD_HITS - 1
    for category, keywords in CATEGORY_KEYWORDS.items():
        hits = count_keywords(text, keywords)
        if hits > best_hits:
            best_category, best_hits = category, hits
    return best_category


def calculate_reading_time(text: str) -> int:
    """Minutes at WORDS_PER_MINUTE, rounded up, never below 1."""
    words = word_count(text)
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def format_reading_time(minutes: int) -> str:
    return f"{minutes} min"


def estimate_difficulty(text: str) -> Difficulty:
    words = word_count(text)
    if words < EASY_WORD_LIMIT:
        return Difficulty.EASY
    if words < MEDIUM_WORD_LIMIT:
        return Difficulty.MEDIUM
    return Difficulty.ADVANCED


def build_tags(category: Category, platform: Platform, text: str, reading_minutes: int) -> List[str]:
    tags = [category.value.lower()]

    if platform != Platform.GENERIC:
        tags.append(platform.value.lower())

    if reading_minutes > LONG_READ_MINUTES:
        tags.append('long-read')

    lowered = (text or '').lower()
    if any(phrase in lowered for phrase in TUTORIAL_PHRASES):
        tags.append('tutorial')

    unique = []
    for tag in tags:
        if tag not in unique:
            unique.append(tag)
    return unique[:MAX_TAGS]


def build_summary(description: str, text: str) -> str:
    """Page description, else the opening sentences of the text."""
    if description:
        return description
    return first_sentences(text, SUMMARY_MAX_CHARS) or NO_SUMMARY


def manual_analysis(url: str, platform: Platform, description: str, text: str) -> Dict:
    """
    Full fallback analysis for a page.

    Args:
        url: Absolute page URL
        platform: Classified platform
        description: Scraped description (may be empty)
        text: Reader-mode text used for counting

    Returns:
        Dict with summary, category, difficulty, readingTime and tags
    """
    category = categorize(url, text)
    minutes = calculate_reading_time(text)
    return {
        'summary': build_summary(description, text),
        'category': category.value,
        'difficulty': estimate_difficulty(text).value,
        'readingTime': format_reading_time(minutes),
        'tags': build_tags(category, platform, text, minutes),
    }
