"""
Exceptions raised by the extraction pipeline.

Only InvalidURL and FetchError are meant to reach a caller as request
failures. AIUnavailable is absorbed by the assembler, and EmptyContent is only
surfaced by the article reader.
"""


class ExtractorError(Exception):
    """Base class for pipeline errors."""
    pass


class InvalidURL(ExtractorError):
    """The submitted URL cannot be normalized into an absolute http(s) URL."""
    pass


class FetchError(ExtractorError):
    """The target page could not be fetched.

    Carries the upstream status so the HTTP layer can mirror it.
    """

    def __init__(self, status: int, status_text: str, details: str = None):
        self.status = status
        self.status_text = status_text
        self.details = details
        super().__init__(f"Failed to fetch URL: {status} {status_text}")


class AIUnavailable(ExtractorError):
    """The Gemini analysis could not be used (no key, quota, bad response...)."""
    pass


class EmptyContent(ExtractorError):
    """The page has no readable text."""
    pass
