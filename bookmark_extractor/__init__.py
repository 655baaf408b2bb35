"""Content extraction and normalization for the Bookmark Extractor."""

from .errors import (
    ExtractorError,
    InvalidURL,
    FetchError,
    AIUnavailable,
    EmptyContent,
)

from .models import (
    Platform,
    Category,
    Difficulty,
    NormalizedURL,
    FetchedDocument,
    ExtractedMetadata,
)

from .url_utils import (
    normalize_url,
    classify_platform,
    build_embed_url,
)

from .pipeline import (
    analyze_url,
    extract_article,
)

from .ai_utils import list_generation_models

__version__ = '1.0.0'

__all__ = [
    # Errors
    'ExtractorError',
    'InvalidURL',
    'FetchError',
    'AIUnavailable',
    'EmptyContent',
    # Models
    'Platform',
    'Category',
    'Difficulty',
    'NormalizedURL',
    'FetchedDocument',
    'ExtractedMetadata',
    # URL handling
    'normalize_url',
    'classify_platform',
    'build_embed_url',
    # Pipeline
    'analyze_url',
    'extract_article',
    'list_generation_models',
]
