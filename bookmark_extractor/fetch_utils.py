"""
Network access for the extraction pipeline.

One GET for the page itself (no retries: the target is arbitrary and a
retry only adds latency) and, for YouTube, an independent oEmbed lookup that
is allowed to fail silently.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict

import requests

from .config import (
    BOT_USER_AGENT,
    BOT_USER_AGENT_PLATFORMS,
    FETCH_TIMEOUT,
    OEMBED_TIMEOUT,
    USER_AGENT,
)
from .errors import FetchError
from .models import FetchedDocument, NormalizedURL, Platform

logger = logging.getLogger(__name__)

YOUTUBE_OEMBED_URL = 'https://www.youtube.com/oembed'


def request_headers(platform: Platform) -> Dict[str, str]:
    """Browser headers, with the crawler User-Agent for platforms that reward it."""
    user_agent = BOT_USER_AGENT if platform.value in BOT_USER_AGENT_PLATFORMS else USER_AGENT
    return {
        'User-Agent': user_agent,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.9',
    }


def fetch_webpage(normalized: NormalizedURL) -> str:
    """
    Fetch the page HTML.

    Raises:
        FetchError: non-2xx status (mirrored), 504 on timeout, 502 when the
            host cannot be reached at all.
    """
    url = normalized.absolute
    try:
        response = requests.get(
            url,
            headers=request_headers(normalized.platform),
            timeout=FETCH_TIMEOUT,
            allow_redirects=True,
        )
    except requests.exceptions.Timeout as e:
        raise FetchError(504, 'Gateway Timeout', f'Request timed out: {e}') from e
    except requests.exceptions.RequestException as e:
        raise FetchError(502, 'Bad Gateway', f'Request failed: {e}') from e

    if not 200 <= response.status_code < 300:
        logger.info("Fetch of %s returned HTTP %s", url, response.status_code)
        raise FetchError(response.status_code, response.reason or 'Error', f'HTTP error: {response.status_code}')

    return response.text


def fetch_youtube_oembed(url: str) -> dict:
    """Fetch YouTube oEmbed metadata. Returns {} on any failure."""
    try:
        response = requests.get(
            YOUTUBE_OEMBED_URL,
            params={'url': url, 'format': 'json'},
            timeout=OEMBED_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            logger.warning("YouTube oEmbed returned non-object JSON for %s", url)
            return {}
        return data
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning("YouTube oEmbed failed for %s: %s", url, e)
        return {}


def fetch_document(normalized: NormalizedURL) -> FetchedDocument:
    """
    Fetch the page and its platform side-channel data.

    The page fetch and the oEmbed fetch do not depend on each other, so they
    run concurrently; both have finished when this returns.
    """
    if normalized.platform != Platform.YOUTUBE:
        return FetchedDocument(html=fetch_webpage(normalized), source_url=normalized)

    with ThreadPoolExecutor(max_workers=2) as executor:
        oembed_future = executor.submit(fetch_youtube_oembed, normalized.absolute)
        page_future = executor.submit(fetch_webpage, normalized)
        oembed = oembed_future.result()
        html = page_future.result()

    return FetchedDocument(html=html, source_url=normalized, platform_metadata=oembed)
