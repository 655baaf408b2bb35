"""
Configuration for the Bookmark Extractor.

Values come from environment variables (set on the Cloud Function) with
defaults suitable for local runs.
"""

import os

# Gemini
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')  # Used when a request carries no apiKey
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')

# HTTP
USER_AGENT = os.environ.get(
    'USER_AGENT',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)
BOT_USER_AGENT = os.environ.get(
    'BOT_USER_AGENT',
    'facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)'
)
# Platforms that serve richer static metadata to crawlers than to browsers
BOT_USER_AGENT_PLATFORMS = [
    p.strip() for p in os.environ.get('BOT_USER_AGENT_PLATFORMS', 'YouTube').split(',') if p.strip()
]
FETCH_TIMEOUT = int(os.environ.get('FETCH_TIMEOUT', '30'))
OEMBED_TIMEOUT = int(os.environ.get('OEMBED_TIMEOUT', '10'))

# Content limits
AI_CONTEXT_MAX_CHARS = int(os.environ.get('AI_CONTEXT_MAX_CHARS', '20000'))
WORDS_PER_MINUTE = int(os.environ.get('WORDS_PER_MINUTE', '200'))
MAX_CAROUSEL_IMAGES = int(os.environ.get('MAX_CAROUSEL_IMAGES', '8'))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
