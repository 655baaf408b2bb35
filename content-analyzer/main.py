"""
Content Analyzer Cloud Function

Takes a bookmarked URL and returns the normalized content record for the
bookmark card and reader view.

Responsibilities:
- Normalize and fetch the URL (plus YouTube oEmbed)
- Sanitize the page for reader mode
- Extract title, description, images, embed URL and platform fields
- Categorize and summarize with Gemini, or with the manual fallback

Does NOT:
- Store bookmarks (the frontend keeps them locally)
- Retry failed fetches
"""

import functions_framework
import json
import logging
import os
import sys

# Add library package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from bookmark_extractor.errors import FetchError, InvalidURL
from bookmark_extractor.logging_utils import setup_logging
from bookmark_extractor.pipeline import analyze_url

setup_logging()
logger = logging.getLogger(__name__)

CORS_PREFLIGHT_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Max-Age': '3600'
}


@functions_framework.http
def analyze_content(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "url": "https://example.com/article",
        "apiKey": "optional Gemini key",
        "model": "optional Gemini model name"
    }
    """
    # Handle CORS
    if request.method == 'OPTIONS':
        return ('', 204, CORS_PREFLIGHT_HEADERS)

    headers = {'Access-Control-Allow-Origin': '*', 'Content-Type': 'application/json'}

    if request.method != 'POST':
        return (json.dumps({'error': 'Method not allowed'}), 405, headers)

    request_json = request.get_json(silent=True) or {}
    url = request_json.get('url') if isinstance(request_json, dict) else None

    if not url or not isinstance(url, str) or not url.strip():
        return (json.dumps({'error': 'URL is required'}), 400, headers)

    try:
        result = analyze_url(url, api_key=request_json.get('apiKey'), model=request_json.get('model'))
        return (json.dumps(result), 200, headers)

    except InvalidURL as e:
        return (json.dumps({'error': 'Invalid URL', 'details': str(e)}), 400, headers)

    except FetchError as e:
        logger.warning("Upstream fetch failed for %s: %s", url, e)
        return (json.dumps({
            'error': f'Failed to fetch URL: {e.status_text}',
            'details': e.details or str(e)
        }), e.status, headers)

    except Exception as e:
        logger.exception("Scraping error for %s", url)
        return (json.dumps({
            'error': 'Failed to analyze URL',
            'details': str(e)
        }), 500, headers)
