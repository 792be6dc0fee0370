"""
Translation module - message translation entry point

This module provides:
- translate(): translate a message to a DeepL-style target code, never raises
- TranslationService: the provider fallback chain
- normalize(): canonical phrases applied before translation
"""

import threading
from typing import Optional

from src.config import get_translator_config
from src.translation.normalizer import normalize
from src.translation.service import TranslationOutcome, TranslationService, build_providers

_service: Optional[TranslationService] = None
_service_lock = threading.Lock()


def get_translation_service() -> TranslationService:
    """Get or create the process-wide translation service."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = TranslationService(get_translator_config())
    return _service


def reset_translation_service(service: Optional[TranslationService] = None) -> None:
    """Replace the process-wide service (None rebuilds it from config on next use)."""
    global _service
    with _service_lock:
        _service = service


def translate(original_text: str, target_language_code: str) -> str:
    """Translate a message; returns the normalized original text if every provider fails."""
    return get_translation_service().translate(original_text, target_language_code)


__all__ = [
    'TranslationOutcome',
    'TranslationService',
    'build_providers',
    'get_translation_service',
    'normalize',
    'reset_translation_service',
    'translate',
]
