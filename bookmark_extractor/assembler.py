"""
Final result assembly.

Combines the extracted metadata, carousel images and reader content with
either the Gemini analysis or the manual fallback. Nothing in here raises for
AI problems: a failed or unusable analysis simply means the manual values
are used.
"""

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from .ai_utils import clamp_category, clamp_difficulty, request_ai_analysis
from .config import AI_CONTEXT_MAX_CHARS
from .errors import AIUnavailable
from .fallback_utils import manual_analysis
from .html_utils import document_body, visible_text
from .models import ExtractedMetadata, FetchedDocument, Platform

logger = logging.getLogger(__name__)

READER_CONTAINERS = ['article', 'main']
NO_CONTENT_PLACEHOLDER = '<div>No readable content found.</div>'
MANUAL_FALLBACK = 'Manual Fallback'


def select_reader_node(soup: BeautifulSoup):
    """First of <article>, <main>, the document body with non-empty content, else None."""
    if soup is None:
        return None
    for name in READER_CONTAINERS:
        node = soup.find(name)
        if node is not None and node.decode_contents().strip():
            return node
    body = document_body(soup)
    if body is not None and body.decode_contents().strip():
        return body
    return None


def select_reader_content(soup: BeautifulSoup) -> str:
    """Inner HTML for reader mode; never empty."""
    node = select_reader_node(soup)
    if node is None:
        return NO_CONTENT_PLACEHOLDER
    return node.decode_contents().strip()


def build_ai_context(soup: BeautifulSoup, metadata: ExtractedMetadata, document: FetchedDocument) -> str:
    """
    Text sent to Gemini.

    Videos get a compact title/author/description block since their page
    text is player chrome. Everything else gets the visible body text, capped
    to bound the request size.
    """
    normalized = document.source_url
    if normalized.platform == Platform.YOUTUBE:
        lines = [
            f"VIDEO_URL: {normalized.absolute}",
            f"Title: {metadata.title}",
        ]
        author = metadata.platform_fields.get('author')
        if author:
            lines.append(f"Author: {author}")
        if metadata.description:
            lines.append(f"Description: {metadata.description}")
        return '\n'.join(lines)

    text = visible_text(document_body(soup), limit=AI_CONTEXT_MAX_CHARS)
    return f'WEBPAGE_TEXT: "{text}"'


def _clean_metadata_value(value) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    value = str(value).strip()
    return value or None


def merge_metadata(ai_metadata, scraped: Dict[str, str]) -> Dict[str, str]:
    """AI metadata augmented by scraped fields; scraped values always win."""
    merged = {}
    if isinstance(ai_metadata, dict):
        for key, value in ai_metadata.items():
            value = _clean_metadata_value(value)
            if value:
                merged[key] = value
    for key, value in scraped.items():
        if value:
            merged[key] = value
    return merged


def merge_ai_analysis(ai_data: dict, manual: dict, scraped: Dict[str, str], platform: Platform) -> dict:
    """
    Validate the model's fields one by one, keeping manual values for any
    field that is missing or malformed.
    """
    merged = dict(manual)

    summary = ai_data.get('summary')
    if isinstance(summary, str) and summary.strip():
        merged['summary'] = summary.strip()

    category = clamp_category(ai_data.get('category'))
    if category:
        merged['category'] = category
    elif ai_data.get('category'):
        logger.info("Discarding out-of-set category from model: %r", ai_data.get('category'))

    difficulty = clamp_difficulty(ai_data.get('difficulty'))
    if difficulty:
        merged['difficulty'] = difficulty

    reading_time = ai_data.get('readingTime')
    if (isinstance(reading_time, (int, float)) and not isinstance(reading_time, bool)
            and math.isfinite(reading_time) and reading_time >= 1):
        merged['readingTime'] = f"{int(reading_time)} min"
    elif isinstance(reading_time, str) and reading_time.strip():
        merged['readingTime'] = reading_time.strip()

    tags = ai_data.get('tags')
    if isinstance(tags, list):
        cleaned = [t.strip() for t in tags if isinstance(t, str) and t.strip()]
        if cleaned:
            merged['tags'] = cleaned

    specifications = ai_data.get('specifications')
    if platform == Platform.SHOPPING and isinstance(specifications, dict) and specifications:
        merged['specifications'] = specifications

    merged['metadata'] = merge_metadata(ai_data.get('metadata'), scraped)
    return merged


def format_date(now: Optional[datetime] = None) -> str:
    """Local calendar date as M/D/YYYY."""
    now = now or datetime.now()
    return f"{now.month}/{now.day}/{now.year}"


def assemble_result(
    document: FetchedDocument,
    soup: BeautifulSoup,
    metadata: ExtractedMetadata,
    images: List[str],
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
) -> dict:
    """
    Build the content-analysis response.

    Args:
        document: Fetched page (platform and raw data)
        soup: Sanitized document
        metadata: Extracted metadata
        images: Carousel candidates
        api_key: Gemini key; None skips the AI step
        model_name: Gemini model

    Returns:
        JSON-ready dict (camelCase keys)
    """
    normalized = document.source_url
    reader_text = visible_text(select_reader_node(soup))
    scraped = {key: value for key, value in metadata.platform_fields.items() if value}

    manual = manual_analysis(normalized.absolute, normalized.platform, metadata.description, reader_text)
    analysis = dict(manual, metadata=dict(scraped))
    used_model = MANUAL_FALLBACK

    if api_key:
        try:
            context = build_ai_context(soup, metadata, document)
            ai_data = request_ai_analysis(context, scraped, normalized.platform, api_key, model_name)
            analysis = merge_ai_analysis(ai_data, manual, scraped, normalized.platform)
            used_model = model_name
        except AIUnavailable as e:
            logger.warning("AI analysis unavailable for %s, using manual fallback: %s", normalized.absolute, e)
        except Exception:
            logger.exception("Unusable AI analysis for %s, using manual fallback", normalized.absolute)
    else:
        logger.info("No Gemini API key, using manual fallback for %s", normalized.absolute)

    result = {
        'title': metadata.title,
        'content': select_reader_content(soup),
        'image': metadata.image,
        'images': images,
        'videoEmbed': metadata.embed_url,
        'originalDescription': metadata.description,
        'summary': analysis['summary'],
        'category': analysis['category'],
        'difficulty': analysis['difficulty'],
        'readingTime': analysis['readingTime'],
        'tags': analysis['tags'],
    }
    if 'specifications' in analysis:
        result['specifications'] = analysis['specifications']
    result['metadata'] = analysis['metadata']
    result['date'] = format_date()
    result['usedModel'] = used_model
    return result
