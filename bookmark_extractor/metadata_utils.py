"""
Metadata extraction from a sanitized page.

Every field is read through an ordered list of lookup strategies. A strategy
is a plain function ``(soup) -> Optional[str]``; the first non-empty result
wins. A strategy that raises is logged and skipped, so one broken selector or
malformed JSON blob only costs that field its value, never the extraction.
"""

import json
import logging
import re
from typing import Callable, Dict, List, Optional
from urllib.parse import urlparse, urlunparse

from bs4 import BeautifulSoup

from .html_utils import parse_html
from .models import ExtractedMetadata, FetchedDocument, NormalizedURL, Platform
from .text_utils import clean_text
from .url_utils import build_embed_url, resolve_url

logger = logging.getLogger(__name__)

Strategy = Callable[[BeautifulSoup], Optional[str]]


# ============================================================================
# Strategy builders
# ============================================================================

def meta_content(attr: str, value: str) -> Strategy:
    """<meta {attr}="{value}" content="..."> lookup."""
    def strategy(soup):
        tag = soup.find('meta', attrs={attr: value})
        return tag.get('content') if tag else None
    return strategy


def tag_text(name: str) -> Strategy:
    def strategy(soup):
        tag = soup.find(name)
        return tag.get_text(strip=True) if tag else None
    return strategy


def select_text(selector: str) -> Strategy:
    def strategy(soup):
        element = soup.select_one(selector)
        return element.get_text(strip=True) if element else None
    return strategy


def select_attr(selector: str, attr: str) -> Strategy:
    def strategy(soup):
        element = soup.select_one(selector)
        return element.get(attr) if element else None
    return strategy


def run_strategies(soup: BeautifulSoup, strategies: List[Strategy], field: str = '') -> Optional[str]:
    """Apply strategies in order; return the first non-empty cleaned value."""
    if soup is None:
        return None

    for strategy in strategies:
        try:
            value = strategy(soup)
        except Exception as e:
            logger.debug("Strategy for %s failed: %s", field or 'field', e)
            continue
        value = clean_text(value) if isinstance(value, str) else None
        if value:
            return value
    return None


# ============================================================================
# Strategy lists
# ============================================================================

TITLE_STRATEGIES = [
    meta_content('property', 'og:title'),
    tag_text('title'),
]

DESCRIPTION_STRATEGIES = [
    meta_content('property', 'og:description'),
    meta_content('name', 'description'),
    meta_content('name', 'twitter:description'),
]

IMAGE_STRATEGIES = [
    meta_content('property', 'og:image'),
    meta_content('property', 'og:image:url'),
    meta_content('name', 'twitter:image'),
    select_attr('link[rel="image_src"]', 'href'),
]

GITHUB_STAR_STRATEGIES = [
    select_text('#repo-stars-counter-star'),
    select_text('.js-social-count'),
    select_text('a[href$="/stargazers"] .Counter'),
    select_text('a[href$="/stargazers"] strong'),
]

GITHUB_FORK_STRATEGIES = [
    select_text('#repo-network-counter'),
    select_text('a[href$="/forks"] .Counter'),
    select_text('a[href$="/forks"] strong'),
    select_text('a[href$="/network/members"] strong'),
]

GITHUB_AUTHOR_STRATEGIES = [
    select_text('span.author a'),
    select_text('[itemprop="author"] a'),
    select_text('[itemprop="author"]'),
    select_text('a[rel="author"]'),
]

# Storefront conventions, most specific first
PRICE_STRATEGIES = [
    select_text('.a-price .a-offscreen'),
    select_text('#corePrice_feature_div .a-offscreen'),
    select_text('#priceblock_ourprice'),
    select_text('#priceblock_dealprice'),
    select_text('.x-price-primary'),
    select_text('#prcIsum'),
    select_attr('[itemprop="price"]', 'content'),
    select_text('[itemprop="price"]'),
    meta_content('property', 'product:price:amount'),
    select_text('.price'),
]

# Paths on github.com that are not repository owners
GITHUB_RESERVED_PATHS = {'features', 'topics', 'orgs', 'marketplace', 'explore', 'settings', 'sponsors', 'login'}

_PLAYER_RESPONSE = re.compile(r'ytInitialPlayerResponse\s*=\s*(?=\{)')
_AMAZON_RESIZE = re.compile(r'\._[A-Za-z0-9,_\-]+_(?=\.[A-Za-z0-9]+$)')
_EBAY_SIZE = re.compile(r'/s-l\d+\.(jpg|jpeg|png|webp)$', re.I)


# ============================================================================
# Field extractors
# ============================================================================

def extract_title(soup: BeautifulSoup, normalized: NormalizedURL, oembed: Optional[dict] = None) -> str:
    """oEmbed title -> og:title -> <title> -> the URL as submitted."""
    oembed_title = clean_text((oembed or {}).get('title') or '')
    if oembed_title:
        return oembed_title
    return run_strategies(soup, TITLE_STRATEGIES, 'title') or normalized.raw


def extract_player_description(raw_html: str) -> Optional[str]:
    """
    Read the video description from YouTube's embedded player state.

    YouTube assigns a large JSON object to ``ytInitialPlayerResponse`` inside
    a <script>. Any problem locating or decoding it returns None.
    """
    if not raw_html or 'ytInitialPlayerResponse' not in raw_html:
        return None

    try:
        for script in parse_html(raw_html).find_all('script'):
            text = script.string or script.get_text()
            match = _PLAYER_RESPONSE.search(text or '')
            if not match:
                continue

            data, _ = json.JSONDecoder().raw_decode(text, match.end())
            description = (data.get('videoDetails') or {}).get('shortDescription')
            if not description:
                renderer = (data.get('microformat') or {}).get('playerMicroformatRenderer') or {}
                description = (renderer.get('description') or {}).get('simpleText')
            if description:
                return clean_text(description)
    except Exception as e:
        logger.debug("YouTube player description unavailable: %s", e)

    return None


def extract_description(soup: BeautifulSoup, document: FetchedDocument) -> str:
    if document.source_url.platform == Platform.YOUTUBE:
        description = extract_player_description(document.html)
        if description:
            return description
    return run_strategies(soup, DESCRIPTION_STRATEGIES, 'description') or ''


def canonicalize_image_url(url: str, platform: Platform) -> str:
    """
    Strip platform resize modifiers to get the full-resolution asset.

    Amazon: .../71abc._AC_SX679_.jpg -> .../71abc.jpg
    eBay:   .../s-l500.jpg           -> .../s-l1600.jpg
    """
    if not url or platform != Platform.SHOPPING:
        return url

    try:
        parsed = urlparse(url)
    except ValueError:
        return url

    path = _AMAZON_RESIZE.sub('', parsed.path)
    path = _EBAY_SIZE.sub(lambda m: f'/s-l1600.{m.group(1)}', path)
    return urlunparse(parsed._replace(path=path))


def extract_image(soup: BeautifulSoup, normalized: NormalizedURL, oembed: Optional[dict] = None) -> str:
    """oEmbed thumbnail -> og:image -> twitter:image -> image_src, canonicalized and absolute."""
    image = clean_text((oembed or {}).get('thumbnail_url') or '')
    if not image:
        image = run_strategies(soup, IMAGE_STRATEGIES, 'image') or ''
    if not image or image.startswith('data:'):
        return ''

    image = canonicalize_image_url(image, normalized.platform)
    return resolve_url(normalized.absolute, image) or ''


# ============================================================================
# Platform-specific fields
# ============================================================================

def github_owner(normalized: NormalizedURL) -> Optional[str]:
    segments = [s for s in urlparse(normalized.absolute).path.split('/') if s]
    if segments and segments[0].lower() not in GITHUB_RESERVED_PATHS:
        return segments[0]
    return None


def extract_github_fields(soup: BeautifulSoup, document: FetchedDocument) -> Dict[str, str]:
    fields = {'platform': 'GitHub'}

    stars = run_strategies(soup, GITHUB_STAR_STRATEGIES, 'stars')
    forks = run_strategies(soup, GITHUB_FORK_STRATEGIES, 'forks')
    author = run_strategies(soup, GITHUB_AUTHOR_STRATEGIES, 'author') or github_owner(document.source_url)

    if stars:
        fields['stars'] = stars
    if forks:
        fields['forks'] = forks
    if author:
        fields['author'] = author
    return fields


def extract_youtube_fields(soup: BeautifulSoup, document: FetchedDocument) -> Dict[str, str]:
    # Likes/views are rendered client-side and absent from static HTML
    fields = {'platform': 'YouTube'}
    author = clean_text(document.platform_metadata.get('author_name') or '')
    if author:
        fields['author'] = author
    return fields


def extract_price(soup: BeautifulSoup) -> Optional[str]:
    """First non-empty price across known storefront markup, as displayed."""
    return run_strategies(soup, PRICE_STRATEGIES, 'price')


def extract_shopping_fields(soup: BeautifulSoup, document: FetchedDocument) -> Dict[str, str]:
    host = document.source_url.host
    if 'amazon' in host or 'amzn' in host:
        store = 'Amazon'
    elif 'ebay' in host:
        store = 'eBay'
    else:
        store = 'Shopping'

    fields = {'platform': store}
    price = extract_price(soup)
    if price:
        fields['price'] = price
    return fields


def extract_generic_fields(soup: BeautifulSoup, document: FetchedDocument) -> Dict[str, str]:
    return {}


PLATFORM_FIELD_EXTRACTORS = {
    Platform.YOUTUBE: extract_youtube_fields,
    Platform.GITHUB: extract_github_fields,
    Platform.SHOPPING: extract_shopping_fields,
    Platform.GENERIC: extract_generic_fields,
}


def _guarded(field: str, default, func, *args):
    try:
        return func(*args)
    except Exception as e:
        logger.warning("Extraction of %s failed, using fallback: %s", field, e)
        return default


def extract_metadata(soup: BeautifulSoup, document: FetchedDocument) -> ExtractedMetadata:
    """
    Extract title, description, image, embed URL and platform fields.

    Args:
        soup: The sanitized document
        document: The fetched document (raw HTML and oEmbed data)

    Returns:
        ExtractedMetadata; fields that could not be read hold their fallback
    """
    normalized = document.source_url
    oembed = document.platform_metadata or {}
    field_extractor = PLATFORM_FIELD_EXTRACTORS[normalized.platform]

    return ExtractedMetadata(
        title=_guarded('title', normalized.raw, extract_title, soup, normalized, oembed) or normalized.raw,
        description=_guarded('description', '', extract_description, soup, document),
        image=_guarded('image', '', extract_image, soup, normalized, oembed),
        embed_url=_guarded('embed_url', None, build_embed_url, normalized),
        platform_fields=_guarded('platform fields', {}, field_extractor, soup, document),
    )
