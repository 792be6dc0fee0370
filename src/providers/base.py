"""Common interface for translation providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderResult:
    """Text produced by one provider call.

    `degraded` is set when the provider answered successfully but without a
    usable translation and the input text was returned in its place.
    """

    text: str
    provider: str
    degraded: bool = False


class TranslationProvider(ABC):
    """One tier of the translation chain."""

    name: str = "provider"

    def is_eligible(self, target_code: str) -> bool:
        """Whether this provider should be tried for a DeepL-style target code."""
        return True

    def code_for(self, target_code: str, base_code: str) -> str:
        """Pick the code this provider expects from the two code spaces."""
        return base_code

    @abstractmethod
    def translate(self, text: str, code: str) -> ProviderResult:
        """Translate text; raise ProviderError on failure."""

    def _result(self, translated, original: str) -> ProviderResult:
        if isinstance(translated, str) and translated:
            return ProviderResult(text=translated, provider=self.name)
        return ProviderResult(text=original, provider=self.name, degraded=True)
