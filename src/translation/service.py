"""
Translation Service Module

Runs a message through the provider chain:
- DeepL, when a key is configured and the target code is supported
- LibreTranslate endpoint pool
- Public Google translate endpoint
- The normalized input text, when every provider failed

Providers are tried strictly in order, once each. translate() never raises.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from src import language_codes as lc
from src.config import TranslatorConfig
from src.logger import get_logger
from src.providers import (
    DeepLProvider,
    GooglePublicProvider,
    LibreTranslateProvider,
    ProviderError,
    TranslationProvider,
)
from src.translation.normalizer import normalize

logger = get_logger(__name__)

NO_PROVIDER = "none"


@dataclass(frozen=True)
class TranslationOutcome:
    """Result of one trip through the chain."""

    text: str
    provider: str = NO_PROVIDER
    degraded: bool = False
    attempts: Tuple[str, ...] = ()


def build_providers(config: TranslatorConfig) -> List[TranslationProvider]:
    """Create the default provider chain, highest priority first."""
    return [
        DeepLProvider(
            api_key=config.deepl_key,
            supported_targets=config.supported_targets,
            api_url=config.deepl_url,
            timeout=config.timeout,
        ),
        LibreTranslateProvider(
            endpoints=config.libretranslate_urls,
            timeout=config.pool_timeout,
            user_agent=config.user_agent,
        ),
        GooglePublicProvider(
            api_url=config.google_url,
            timeout=config.timeout,
        ),
    ]


class TranslationService:
    """Fallback chain over an ordered list of providers."""

    def __init__(
        self,
        config: Optional[TranslatorConfig] = None,
        providers: Optional[Sequence[TranslationProvider]] = None,
    ):
        self.config = config or TranslatorConfig()
        self.providers = list(providers) if providers is not None else build_providers(self.config)

    def translate(self, original_text: str, target_code: str) -> str:
        """Translate text to a DeepL-style target code; falls back to the normalized text."""
        return self.translate_detailed(original_text, target_code).text

    def translate_detailed(self, original_text: str, target_code: str) -> TranslationOutcome:
        """
        Translate text and report which provider produced the result.

        Args:
            original_text: Message text
            target_code: Target language in DeepL code space (e.g. 'EN-US', 'PT-PT')

        Returns:
            TranslationOutcome; provider is 'none' when every provider failed
        """
        text = normalize(original_text)
        target_code = target_code or ''
        base = lc.base_code(target_code)
        attempts: List[str] = []

        logger.debug(f"Translating {len(text)} chars to {target_code} (base: {base})")

        for provider in self.providers:
            try:
                if not provider.is_eligible(target_code):
                    logger.debug(f"Skipping {provider.name} for {target_code}")
                    continue
            except Exception as e:
                logger.warning(f"Eligibility check for {provider.name} failed ({e}), skipping")
                continue

            attempts.append(provider.name)
            try:
                result = provider.translate(text, provider.code_for(target_code, base))
            except ProviderError as e:
                logger.warning(f"{provider.name} failed ({e}), trying next provider")
                continue
            except Exception as e:
                logger.warning(f"{provider.name} raised unexpected error ({e!r}), trying next provider")
                continue

            if result.degraded:
                logger.warning(f"{provider.name} returned no translation, using input text")
            else:
                logger.info(f"Translated via {provider.name} to {target_code}")
            return TranslationOutcome(
                text=result.text,
                provider=result.provider,
                degraded=result.degraded,
                attempts=tuple(attempts),
            )

        logger.warning(f"All providers failed for {target_code}, returning original text")
        return TranslationOutcome(text=text, degraded=True, attempts=tuple(attempts))
