"""
Model Lister Cloud Function

Lists the Gemini models a caller's API key can use for content generation,
so the frontend can offer a model picker.
"""

import functions_framework
import json
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from bookmark_extractor.ai_utils import list_generation_models
from bookmark_extractor.logging_utils import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@functions_framework.http
def list_models(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "apiKey": "Gemini API key"
    }
    """
    if request.method == 'OPTIONS':
        return ('', 204, {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'POST',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        })

    headers = {'Access-Control-Allow-Origin': '*', 'Content-Type': 'application/json'}

    if request.method != 'POST':
        return (json.dumps({'error': 'Method not allowed'}), 405, headers)

    request_json = request.get_json(silent=True) or {}
    api_key = request_json.get('apiKey') if isinstance(request_json, dict) else None

    if not api_key:
        return (json.dumps({'error': 'API Key is required to list models'}), 400, headers)

    try:
        models = list_generation_models(api_key)
        return (json.dumps({'models': models}), 200, headers)
    except Exception as e:
        logger.exception("Model fetch error")
        return (json.dumps({
            'error': 'Failed to fetch models',
            'details': str(e)
        }), 500, headers)
