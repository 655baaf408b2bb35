"""
Gemini analysis for the Bookmark Extractor.

The model is an opaque text-completion service: it gets a prompt with the
page context and the already-scraped metadata, and is asked for JSON. Any
failure along the way (no key, quota, network, unparseable reply) is raised
as AIUnavailable so the caller can switch to the manual fallback.
"""

import json
import logging
from typing import Dict, List, Optional

import google.generativeai as genai

from .errors import AIUnavailable
from .models import Category, Difficulty, Platform

logger = logging.getLogger(__name__)

CATEGORY_NAMES = [c.value for c in Category]
DIFFICULTY_NAMES = [d.value for d in Difficulty]

# Synonyms the model tends to use instead of the requested values
DIFFICULTY_ALIASES = {
    'hard': Difficulty.ADVANCED.value,
    'difficult': Difficulty.ADVANCED.value,
    'beginner': Difficulty.EASY.value,
    'intermediate': Difficulty.MEDIUM.value,
}


def build_prompt(context: str, seed_metadata: Dict[str, str], platform: Platform) -> str:
    """Prompt asking for the structured JSON analysis."""
    seed = {key: seed_metadata.get(key, '') for key in ('stars', 'forks', 'author', 'price')}
    seed['platform'] = seed_metadata.get('platform', '')

    shopping_field = ''
    if platform == Platform.SHOPPING:
        shopping_field = '\n  "specifications": {"key feature": "value"},'

    return f"""You are a content curator.

{context}

I have already scraped this metadata: {json.dumps(seed_metadata)}.
Keep these values and add anything I missed.

Task:
1. Determine the Category, exactly one of: {', '.join(CATEGORY_NAMES)}.
   - If YouTube/Vimeo, strictly "Videos".
   - If GitHub/StackOverflow, strictly "Coding".
2. Generate a 2-sentence summary.
3. Rate the difficulty, exactly one of: {', '.join(DIFFICULTY_NAMES)}.
4. Extract additional metadata (e.g. author, likes, platform).

Respond in this exact JSON format:
{{
  "summary": "...",
  "category": "{' | '.join(CATEGORY_NAMES)}",
  "difficulty": "{' | '.join(DIFFICULTY_NAMES)}",
  "readingTime": "e.g. 5 min",
  "tags": ["tag1", "tag2"],{shopping_field}
  "metadata": {{
    "likes": "",
    "stars": {json.dumps(seed['stars'])},
    "forks": {json.dumps(seed['forks'])},
    "author": {json.dumps(seed['author'])},
    "price": {json.dumps(seed['price'])},
    "platform": {json.dumps(seed['platform'])}
  }}
}}
"""


def extract_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} span in text, or None.

    Braces inside JSON strings (and escaped quotes) do not count.
    """
    if not text:
        return None

    start = text.find('{')
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == '\\':
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    return text[start:index + 1]
        # Unbalanced from here; try the next opening brace
        start = text.find('{', start + 1)

    return None


def parse_ai_response(text: str) -> dict:
    """
    Parse the model reply as a JSON object.

    Strict parsing first, then the first balanced {...} span embedded in
    surrounding prose or code fences.

    Raises:
        AIUnavailable: nothing usable in the reply
    """
    if not text or not text.strip():
        raise AIUnavailable('Empty response from model')

    try:
        data = json.loads(text)
    except ValueError:
        span = extract_json_object(text)
        if span is None:
            raise AIUnavailable('No JSON object in model response')
        try:
            data = json.loads(span)
        except ValueError as e:
            raise AIUnavailable(f'Invalid JSON in model response: {e}') from e

    if not isinstance(data, dict):
        raise AIUnavailable('Model response is not a JSON object')
    return data


def request_ai_analysis(
    context: str,
    seed_metadata: Dict[str, str],
    platform: Platform,
    api_key: Optional[str],
    model_name: str,
) -> dict:
    """
    Ask Gemini for the structured analysis.

    Args:
        context: Page text or the compact video block
        seed_metadata: Scraped platform fields the model must keep
        platform: Classified platform
        api_key: Gemini API key
        model_name: Model to use, e.g. gemini-2.0-flash

    Returns:
        Parsed JSON object from the model (unvalidated)

    Raises:
        AIUnavailable: on any failure
    """
    if not api_key:
        raise AIUnavailable('No Gemini API key configured')

    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(
            model_name,
            generation_config={'response_mime_type': 'application/json'},
        )
        response = model.generate_content(build_prompt(context, seed_metadata, platform))
        response_text = response.text
    except Exception as e:
        raise AIUnavailable(f'Gemini request failed: {e}') from e

    return parse_ai_response(response_text)


def clamp_category(value) -> Optional[str]:
    """Map a model category onto the fixed set; None when it does not fit."""
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    for name in CATEGORY_NAMES:
        if lowered == name.lower():
            return name
    return None


def clamp_difficulty(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    for name in DIFFICULTY_NAMES:
        if lowered == name.lower():
            return name
    return DIFFICULTY_ALIASES.get(lowered)


def list_generation_models(api_key: str) -> List[Dict[str, str]]:
    """
    Models available to the key that support generateContent, sorted by name.

    Raises whatever the SDK raises; the HTTP layer reports it as a 500.
    """
    genai.configure(api_key=api_key)

    models = []
    for model in genai.list_models():
        if 'generateContent' not in (getattr(model, 'supported_generation_methods', None) or []):
            continue
        models.append({
            'name': model.name.replace('models/', ''),
            'displayName': getattr(model, 'display_name', None),
            'description': getattr(model, 'description', None),
            'version': getattr(model, 'version', None),
        })

    return sorted(models, key=lambda m: m['name'])
