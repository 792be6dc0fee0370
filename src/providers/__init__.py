"""
Translation Providers

One module per tier of the translation chain:
- DeepL (authenticated, region-qualified target codes)
- LibreTranslate (ordered pool of endpoints)
- Public Google translate endpoint (last resort)
"""

from src.providers.base import ProviderResult, TranslationProvider
from src.providers.deepl import DeepLProvider
from src.providers.exceptions import ProviderError, TranslationError
from src.providers.google_public import GooglePublicProvider
from src.providers.libretranslate import LibreTranslateProvider

__all__ = [
    'DeepLProvider',
    'GooglePublicProvider',
    'LibreTranslateProvider',
    'ProviderError',
    'ProviderResult',
    'TranslationError',
    'TranslationProvider',
]
