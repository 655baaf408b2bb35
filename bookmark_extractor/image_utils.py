"""
Carousel image collection.

Candidates come from the sanitized document's <img> tags, whose src has
already been resolved to an absolute URL. Canonicalization runs before the
exclusion and duplicate checks so that size variants of one asset collapse.
"""

from typing import List

from bs4 import BeautifulSoup

from .config import MAX_CAROUSEL_IMAGES
from .metadata_utils import canonicalize_image_url
from .models import NormalizedURL
from .url_utils import is_absolute_url

# URL substrings that mark non-content imagery
EXCLUDED_IMAGE_MARKERS = ['icon', 'logo', 'avatar', 'gif']


def is_content_image(url: str) -> bool:
    lowered = url.lower()
    return not any(marker in lowered for marker in EXCLUDED_IMAGE_MARKERS)


def collect_images(
    soup: BeautifulSoup,
    normalized: NormalizedURL,
    primary_image: str = '',
    limit: int = MAX_CAROUSEL_IMAGES,
) -> List[str]:
    """
    Ordered, deduplicated carousel candidates.

    Args:
        soup: The sanitized document
        normalized: Page URL (its platform picks the canonicalization rule)
        primary_image: The page's main image; listed first when it is a
            content image
        limit: Maximum number of URLs returned

    Returns:
        Absolute image URLs in document order, primary image first
    """
    candidates = []
    if primary_image:
        candidates.append(primary_image)

    if soup is not None:
        for img in soup.find_all('img'):
            src = (img.get('src') or '').strip()
            if src and not src.startswith('data:'):
                candidates.append(src)

    images = []
    seen = set()
    for url in candidates:
        if not is_absolute_url(url):
            continue
        url = canonicalize_image_url(url, normalized.platform)
        if url in seen or not is_content_image(url):
            continue
        seen.add(url)
        images.append(url)
        if len(images) >= limit:
            break

    return images
