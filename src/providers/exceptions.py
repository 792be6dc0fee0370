"""
Provider Exceptions

Exception classes raised by the translation providers.
Separated to avoid circular imports between the providers and the
translation service.
"""


class TranslationError(Exception):
    """Translation error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ProviderError(TranslationError):
    """A single provider call failed (bad status, timeout, unusable response)."""

    def __init__(self, message: str, provider: str = None, code: str = None, details: dict = None):
        super().__init__(message, code=code, details=details)
        self.provider = provider
