"""
Data models shared by the extraction stages.

Each request builds its own instances; nothing here is cached or persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class Platform(Enum):
    """Source platform, decides which extractors run."""

    YOUTUBE = 'YouTube'
    GITHUB = 'GitHub'
    SHOPPING = 'Shopping'
    GENERIC = 'Generic'


class Category(Enum):
    VIDEOS = 'Videos'
    CODING = 'Coding'
    SHOPPING = 'Shopping'
    RESEARCH = 'Research'
    ARTICLES = 'Articles'


class Difficulty(Enum):
    EASY = 'Easy'
    MEDIUM = 'Medium'
    ADVANCED = 'Advanced'


@dataclass
class NormalizedURL:
    """A submitted URL after scheme repair and platform classification."""

    raw: str
    absolute: str
    host: str
    platform: Platform


@dataclass
class FetchedDocument:
    """
    Raw page HTML plus side-channel platform data (e.g. YouTube oEmbed).

    Lives for the duration of a single extraction request.
    """

    html: str
    source_url: NormalizedURL
    platform_metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class ExtractedMetadata:
    title: str
    description: str = ''
    image: str = ''
    embed_url: Optional[str] = None
    platform_fields: Dict[str, str] = field(default_factory=dict)
