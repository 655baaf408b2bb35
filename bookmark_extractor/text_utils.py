"""
Text cleanup utilities for scraped strings.

Scraped titles, descriptions and page text arrive with layout whitespace,
control characters and no length bound. These helpers normalize them before
they are returned to the caller or sent to Gemini.
"""

import re
from typing import Tuple

# Control characters except tab/newline, which collapse_whitespace handles
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
_WHITESPACE = re.compile(r'\s+')
_SENTENCE_END = re.compile(r'(?<=[.!?])\s+')


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and strip the ends."""
    if not text:
        return ''
    return _WHITESPACE.sub(' ', text).strip()


def clean_text(text: str) -> str:
    """
    Strip control characters and normalize whitespace.

    Unlike a filename sanitizer this keeps all printable characters, since
    titles legitimately contain symbols and non-Latin scripts.
    """
    if not text:
        return ''
    return collapse_whitespace(_CONTROL_CHARS.sub('', text))


def truncate_text(text: str, max_length: int, suffix: str = '...') -> Tuple[str, bool]:
    """
    Truncate text at a word boundary, not mid-word.

    Args:
        text: The text to truncate
        max_length: Maximum length of the result, suffix included
        suffix: Appended when the text was cut

    Returns:
        Tuple of (truncated_text, was_truncated)

    Examples:
        >>> truncate_text("Hello World", 70)
        ('Hello World', False)

        >>> truncate_text("This is a very long sentence that goes on", 20)
        ('This is a very...', True)
    """
    if not text:
        return ('', False)

    text = collapse_whitespace(text)

    if len(text) <= max_length:
        return (text, False)

    limit = max(max_length - len(suffix), 1)
    truncated = text[:limit]
    last_space = truncated.rfind(' ')

    # Single long word: hard cut
    if last_space == -1:
        return (truncated + suffix, True)

    return (truncated[:last_space].rstrip(' ,;:-') + suffix, True)


def first_sentences(text: str, max_length: int = 280) -> str:
    """
    Return as many leading whole sentences as fit in max_length.

    Falls back to a word-boundary cut when the first sentence alone is too long.
    """
    text = collapse_whitespace(text)
    if not text:
        return ''

    result = ''
    for sentence in _SENTENCE_END.split(text):
        candidate = f"{result} {sentence}".strip()
        if len(candidate) > max_length:
            break
        result = candidate

    if not result:
        result, _ = truncate_text(text, max_length)
    return result


def word_count(text: str) -> int:
    if not text:
        return 0
    return len(text.split())
