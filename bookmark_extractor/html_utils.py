"""
HTML parsing and reader-mode sanitization.

sanitize_document mutates the soup in place. Every stage after it works on
the sanitized tree, never on the raw HTML (the one exception is the YouTube
player-state parser, which needs the <script> tags this pass removes).
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Doctype, Tag

from .models import NormalizedURL
from .text_utils import collapse_whitespace
from .url_utils import resolve_url

logger = logging.getLogger(__name__)

# Elements never shown in reader mode
REMOVED_TAGS = ['script', 'style', 'noscript', 'nav', 'footer', 'header', 'aside', 'iframe']

# Advertisement marker classes (matched as whole class tokens)
AD_CLASSES = ['ad', 'ads', 'advert', 'advertisement', 'adsbygoogle', 'ad-banner', 'ad-container', 'sponsored']

# Lazy-load attributes hold the real image when present
IMAGE_SOURCE_ATTRS = ['data-src', 'data-original', 'src']
IMAGE_STRIPPED_ATTRS = ['srcset', 'loading', 'data-src', 'data-original']

SKIPPED_HREF_PREFIXES = ('#', 'javascript:', 'mailto:', 'tel:', 'data:')

# Elements that belong in <head> even when the page leaves the tag out
HEAD_ONLY_TAGS = ['head', 'title', 'meta', 'link', 'base']


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or '', 'html.parser')


def resolve_image_src(img: Tag, base: str) -> Optional[str]:
    """
    Absolute URL of the image an <img> really shows.

    Lazy-load attributes win over src. Data-URLs are never resolved.
    """
    for attr in IMAGE_SOURCE_ATTRS:
        value = (img.get(attr) or '').strip()
        if not value:
            continue
        if value.startswith('data:'):
            # Placeholder
            continue
        return resolve_url(base, value)
    return None


def sanitize_document(html: str, normalized: NormalizedURL, rewrite_links: bool = True) -> BeautifulSoup:
    """
    Parse HTML and strip it down to reader-mode content.

    - Removes script/style/nav/footer/header/aside/iframe and ad containers
    - Rewrites <img src> to the absolute lazy-load-aware source and drops
      srcset (which may still hold relative paths) and lazy markers
    - Optionally rewrites <a href> to absolute URLs opening in a new tab

    Args:
        html: Raw page HTML
        normalized: The page URL, used as the base for relative references
        rewrite_links: Also rewrite anchors

    Returns:
        The sanitized BeautifulSoup document
    """
    soup = parse_html(html)
    base = normalized.absolute

    for element in soup.find_all(REMOVED_TAGS):
        element.decompose()

    ad_selector = ', '.join(f'.{cls}' for cls in AD_CLASSES)
    for element in soup.select(ad_selector):
        # A parent removed earlier in this loop has already taken it along
        if not element.decomposed:
            element.decompose()

    for img in soup.find_all('img'):
        src = resolve_image_src(img, base)
        if src:
            img['src'] = src
        for attr in IMAGE_STRIPPED_ATTRS:
            if attr in img.attrs:
                del img[attr]

    if rewrite_links:
        for anchor in soup.find_all('a', href=True):
            href = anchor['href'].strip()
            if not href or href.lower().startswith(SKIPPED_HREF_PREFIXES):
                continue
            absolute = resolve_url(base, href)
            if absolute:
                anchor['href'] = absolute
                anchor['target'] = '_blank'
                anchor['rel'] = 'noopener noreferrer'

    return soup


def document_body(soup: BeautifulSoup):
    """
    The <body> element, or for pages that omit the optional <body> tag a
    detached copy of the document without its head-only elements.

    html.parser never synthesizes an implied <body>, so a bare HTML5 page
    like ``<title>Post</title><p>Text</p>`` has no body element at all.
    """
    if soup is None:
        return None

    body = soup.find('body')
    if body is not None:
        return body

    root = parse_html(soup.decode())
    for element in root.find_all(HEAD_ONLY_TAGS):
        if not element.decomposed:
            element.decompose()
    for node in list(root.contents):
        if isinstance(node, Doctype):
            node.extract()

    html = root.find('html')
    return html if html is not None else root


def visible_text(node, limit: Optional[int] = None) -> str:
    """Whitespace-collapsed text of a node, optionally capped at limit characters."""
    if node is None:
        return ''
    text = collapse_whitespace(node.get_text(separator=' '))
    if limit is not None:
        text = text[:limit]
    return text
