"""
Article Reader Cloud Function

Proxies a page fetch for the browser (which cannot fetch cross-origin) and
returns its readable text for reader mode and word counts.

Expects GET /?url=https://example.com/article
"""

import functions_framework
import json
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from bookmark_extractor.errors import EmptyContent, FetchError, InvalidURL
from bookmark_extractor.logging_utils import setup_logging
from bookmark_extractor.pipeline import extract_article

setup_logging()
logger = logging.getLogger(__name__)


@functions_framework.http
def read_article(request):
    """Main Cloud Function entry point."""
    if request.method == 'OPTIONS':
        return ('', 204, {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'GET',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        })

    headers = {'Access-Control-Allow-Origin': '*', 'Content-Type': 'application/json'}

    url = request.args.get('url')
    if not url:
        return (json.dumps({'error': 'URL parameter is missing.'}), 400, headers)

    try:
        logger.info("Attempting to fetch and parse: %s", url)
        article = extract_article(url)
        return (json.dumps(article), 200, headers)

    except InvalidURL as e:
        return (json.dumps({'error': 'Invalid URL', 'details': str(e)}), 400, headers)

    except FetchError as e:
        return (json.dumps({'error': f'Failed to fetch URL: {e.status_text}'}), e.status, headers)

    except EmptyContent:
        return (json.dumps({'error': 'Could not extract main article content.'}), 404, headers)

    except Exception:
        logger.exception("Error during article fetching/parsing for %s", url)
        return (json.dumps({'error': 'Internal server error during content processing.'}), 500, headers)
