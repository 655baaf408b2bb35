"""
End-to-end extraction pipeline.

normalize -> fetch -> sanitize -> {metadata, images} -> assemble

Only InvalidURL and FetchError escape analyze_url; every later stage degrades
instead of failing.
"""

import logging
from typing import Optional

from . import config
from .assembler import assemble_result, select_reader_node
from .errors import EmptyContent
from .fetch_utils import fetch_document, fetch_webpage
from .html_utils import sanitize_document, visible_text
from .image_utils import collect_images
from .metadata_utils import TITLE_STRATEGIES, extract_metadata, run_strategies
from .text_utils import word_count
from .url_utils import normalize_url

logger = logging.getLogger(__name__)


def analyze_url(url: str, api_key: Optional[str] = None, model: Optional[str] = None) -> dict:
    """
    Fetch, scrape and analyze a URL.

    Args:
        url: URL as submitted (scheme optional)
        api_key: Gemini API key; falls back to the GEMINI_API_KEY setting
        model: Gemini model name; falls back to the GEMINI_MODEL setting

    Returns:
        The content-analysis response dict

    Raises:
        InvalidURL: url cannot be normalized
        FetchError: the page could not be fetched
    """
    normalized = normalize_url(url)
    logger.info("Analyzing %s (platform: %s)", normalized.absolute, normalized.platform.value)

    document = fetch_document(normalized)
    soup = sanitize_document(document.html, normalized)
    metadata = extract_metadata(soup, document)
    images = collect_images(soup, normalized, metadata.image)

    return assemble_result(
        document,
        soup,
        metadata,
        images,
        api_key=api_key or config.GEMINI_API_KEY,
        model_name=model or config.GEMINI_MODEL,
    )


def extract_article(url: str) -> dict:
    """
    Plain-text reader extraction.

    Returns:
        Dict with title, content (plain text) and wordCount

    Raises:
        InvalidURL, FetchError, EmptyContent
    """
    normalized = normalize_url(url)
    html = fetch_webpage(normalized)
    soup = sanitize_document(html, normalized, rewrite_links=False)

    text = visible_text(select_reader_node(soup))
    if not text:
        raise EmptyContent(f"No readable text at {normalized.absolute}")

    host = normalized.host[4:] if normalized.host.startswith('www.') else normalized.host
    title = run_strategies(soup, TITLE_STRATEGIES, 'title') or host

    return {
        'title': title,
        'content': text,
        'wordCount': word_count(text),
    }
