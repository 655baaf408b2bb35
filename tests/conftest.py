"""
Shared pytest fixtures for Bookmark Extractor tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

from bookmark_extractor import config
from bookmark_extractor.html_utils import sanitize_document
from bookmark_extractor.models import FetchedDocument
from bookmark_extractor.url_utils import normalize_url

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load Cloud Function modules with unique names at module load time
_content_analyzer_module = _load_module_from_path(
    'content_analyzer_main',
    PROJECT_ROOT / 'content-analyzer' / 'main.py'
)

_model_lister_module = _load_module_from_path(
    'model_lister_main',
    PROJECT_ROOT / 'model-lister' / 'main.py'
)

_article_reader_module = _load_module_from_path(
    'article_reader_main',
    PROJECT_ROOT / 'article-reader' / 'main.py'
)


@pytest.fixture(autouse=True)
def no_default_gemini_key(monkeypatch):
    """Never pick up a real GEMINI_API_KEY from the environment."""
    monkeypatch.setattr(config, 'GEMINI_API_KEY', None)


# ============================================================================
# Cloud Function entry points
# ============================================================================

@pytest.fixture
def analyze_content():
    """Returns analyze_content entry point from content-analyzer."""
    return _content_analyzer_module.analyze_content


@pytest.fixture
def list_models():
    """Returns list_models entry point from model-lister."""
    return _model_lister_module.list_models


@pytest.fixture
def read_article():
    """Returns read_article entry point from article-reader."""
    return _article_reader_module.read_article


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST', args=None):
            self._json = json_data
            self.method = method
            self.args = args or {}
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


# ============================================================================
# Documents
# ============================================================================

@pytest.fixture
def make_document():
    """Factory: (html, url, oembed) -> (FetchedDocument, sanitized soup)."""
    def _make(html, url='https://example.com/post', oembed=None):
        normalized = normalize_url(url)
        document = FetchedDocument(html=html, source_url=normalized, platform_metadata=oembed or {})
        return document, sanitize_document(html, normalized)
    return _make


@pytest.fixture
def sample_article_html():
    """A generic article page with lazy images and page chrome."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>10 Python Tips | Example Blog</title>
        <meta property="og:title" content="10 Python Tips You Should Know">
        <meta property="og:description" content="Learn essential Python tips">
        <meta name="description" content="Plain meta description">
        <meta property="og:image" content="/images/cover.jpg">
    </head>
    <body>
        <header><a href="/">Example Blog</a></header>
        <nav><a href="/about">About</a></nav>
        <article>
            <h1>10 Python Tips You Should Know</h1>
            <p>Here are some tips for Python development.</p>
            <img src="data:image/gif;base64,R0lGOD" data-src="/images/tip1.jpg" srcset="/images/tip1-2x.jpg 2x" loading="lazy">
            <img src="https://cdn.example.com/site-logo.png">
            <img src="images/tip2.jpg">
            <a href="/related">Related post</a>
        </article>
        <div class="ad">Buy now!</div>
        <footer>Copyright</footer>
        <script>var tracking = true;</script>
    </body>
    </html>
    """


@pytest.fixture
def sample_github_html():
    """A GitHub repository page with star and fork counters."""
    return """
    <html>
    <head>
        <title>octocat/hello-world: A sample repository</title>
        <meta property="og:title" content="octocat/hello-world">
        <meta property="og:description" content="My first repository on GitHub!">
        <meta property="og:image" content="https://opengraph.githubassets.com/1/octocat/hello-world">
    </head>
    <body>
        <div id="repository-container-header">
            <span class="author"><a href="/octocat">octocat</a></span>
            <span id="repo-stars-counter-star" title="1,234">1.2k</span>
            <span id="repo-network-counter" title="310">310</span>
        </div>
        <main><p>Hello World readme.</p></main>
    </body>
    </html>
    """


@pytest.fixture
def sample_youtube_html():
    """A YouTube watch page with an embedded player response."""
    return """
    <html>
    <head>
        <title>Never Gonna Give You Up - YouTube</title>
        <meta property="og:title" content="Rick Astley - Never Gonna Give You Up">
        <meta property="og:description" content="Short meta description">
        <meta property="og:image" content="https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg">
    </head>
    <body>
        <script>var ytInitialPlayerResponse = {"videoDetails": {"videoId": "dQw4w9WgXcQ", "shortDescription": "The official video for {Never Gonna Give You Up}"}};var meta = {};</script>
        <div id="player"></div>
    </body>
    </html>
    """


@pytest.fixture
def sample_amazon_html():
    """An Amazon product page with resized image variants."""
    return """
    <html>
    <head>
        <title>Amazon.com: Widget Pro</title>
        <meta property="og:title" content="Widget Pro">
        <meta property="og:image" content="https://m.media-amazon.com/images/I/71abc._AC_SX679_.jpg">
    </head>
    <body>
        <div id="dp">
            <span class="a-price"><span class="a-offscreen">$29.99</span></span>
            <span class="price">$99.00</span>
            <img src="https://m.media-amazon.com/images/I/71abc._AC_SX425_.jpg">
            <img src="https://m.media-amazon.com/images/I/81def._AC_SL1500_.jpg">
            <img src="https://m.media-amazon.com/images/G/amazon-logo.png">
        </div>
    </body>
    </html>
    """


@pytest.fixture
def youtube_oembed():
    return {
        "title": "Rick Astley - Never Gonna Give You Up (Official Video)",
        "author_name": "Rick Astley",
        "thumbnail_url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
        "provider_name": "YouTube"
    }
