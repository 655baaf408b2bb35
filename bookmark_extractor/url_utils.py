"""
URL normalization and platform classification.

Every later stage resolves relative references against the absolute URL
produced here, so normalization has to succeed before any network access.
"""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

from .errors import InvalidURL
from .models import NormalizedURL, Platform

# Checked in order, first match wins
YOUTUBE_PATTERNS = ['youtube.com', 'youtu.be']
GITHUB_PATTERNS = ['github.com']
SHOPPING_PATTERNS = ['amazon', 'amzn', 'ebay']

_SCHEME_PREFIX = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*://')
_YOUTUBE_ID = re.compile(
    r'(?:youtu\.be/|youtube\.com/(?:embed/|v/|shorts/|watch\?v=|watch\?.+&v=))([^#&?/]*)'
)


def normalize_url(raw: str) -> NormalizedURL:
    """
    Turn user input into an absolute http(s) URL and classify its platform.

    Surrounding whitespace is stripped. Input without a scheme gets
    ``https://`` prepended; input that already is an absolute URL is kept
    exactly as given.

    Raises:
        InvalidURL: empty input, unsupported scheme, missing host, embedded
            whitespace or a malformed port.
    """
    if raw is None or not str(raw).strip():
        raise InvalidURL('URL is empty')

    raw = str(raw).strip()
    candidate = raw
    if not _SCHEME_PREFIX.match(candidate):
        candidate = f"https://{candidate}"

    if re.search(r'\s', candidate):
        raise InvalidURL(f"URL contains whitespace: {raw!r}")

    try:
        parsed = urlparse(candidate)
        # Accessing .port validates it
        parsed.port
    except ValueError as e:
        raise InvalidURL(f"Malformed URL {raw!r}: {e}") from e

    if parsed.scheme.lower() not in ('http', 'https'):
        raise InvalidURL(f"Unsupported URL scheme: {parsed.scheme}")

    if not parsed.hostname:
        raise InvalidURL(f"URL has no host: {raw!r}")

    return NormalizedURL(
        raw=raw,
        absolute=candidate,
        host=parsed.hostname.lower(),
        platform=classify_platform(candidate),
    )


def classify_platform(url: str) -> Platform:
    """Classify by substring match. Heuristic; misclassification is accepted."""
    lowered = (url or '').lower()

    for pattern in YOUTUBE_PATTERNS:
        if pattern in lowered:
            return Platform.YOUTUBE

    for pattern in GITHUB_PATTERNS:
        if pattern in lowered:
            return Platform.GITHUB

    for pattern in SHOPPING_PATTERNS:
        if pattern in lowered:
            return Platform.SHOPPING

    return Platform.GENERIC


def extract_youtube_id(url: str) -> Optional[str]:
    """Extract the video ID from youtu.be, watch, embed, v/ and shorts URLs."""
    match = _YOUTUBE_ID.search(url or '')
    if match and match.group(1):
        return match.group(1)
    return None


def build_embed_url(normalized: NormalizedURL) -> Optional[str]:
    """Embeddable player URL for recognized video platforms, else None."""
    if normalized.platform == Platform.YOUTUBE:
        video_id = extract_youtube_id(normalized.absolute)
        if video_id:
            return f"https://www.youtube.com/embed/{video_id}"
        return None

    if 'vimeo.com' in normalized.host:
        segments = [s for s in urlparse(normalized.absolute).path.split('/') if s]
        if segments:
            return f"https://player.vimeo.com/video/{segments[-1]}"

    return None


def is_absolute_url(url: str) -> bool:
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def resolve_url(base: str, ref: str) -> Optional[str]:
    """Resolve ref against base; None if the result is not an absolute http(s) URL."""
    if not ref:
        return None
    try:
        resolved = urljoin(base, ref.strip())
    except ValueError:
        return None
    return resolved if is_absolute_url(resolved) else None
