"""DeepL API abstraction for tag-aware translation and glossary management.

The SDK import is deferred to first use (lazy loading) so that the package
imports cleanly when no API key is configured. The SDK is synchronous; each
call runs in a worker thread so the event loop stays responsive.
"""

import asyncio
import logging
from typing import Any

from subscriber.translation.config import TranslationConfig

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """Raised when the translation provider or the terms source fails."""


class TranslatorClient:
    """Thin async wrapper around ``deepl.Translator``.

    Translation requests always use HTML tag handling with sentence
    splitting enabled, which is what keeps encoded regions intact.

    Args:
        config: Translation configuration with the API key and languages.
    """

    def __init__(self, config: TranslationConfig) -> None:
        self._config = config
        self._translator: Any = None

    def _get_translator(self) -> Any:
        """Lazy-initialize the DeepL translator."""
        if self._translator is None:
            api_key = self._config.deepl_api_key
            if api_key is None:
                raise TranslationError("DeepL API key is not configured")

            import deepl

            self._translator = deepl.Translator(api_key.get_secret_value())
        return self._translator

    async def _call(self, operation: str, func_name: str, *args: Any, **kwargs: Any) -> Any:
        translator = self._get_translator()
        func = getattr(translator, func_name)
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except Exception as e:
            logger.error(f"DeepL {operation} failed: {e}")
            raise TranslationError(f"DeepL {operation} failed: {e}") from e

    async def translate(self, text: str, glossary: Any = None) -> str:
        """
        Translate HTML-tagged text.

        Args:
            text: Text to translate; tags are preserved by the provider
            glossary: Optional glossary to apply

        Returns:
            Translated text

        Raises:
            TranslationError: If the key is missing or the provider fails
        """
        result = await self._call(
            "translate",
            "translate_text",
            text,
            source_lang=self._config.source_lang,
            target_lang=self._config.target_lang,
            glossary=glossary,
            tag_handling="html",
            split_sentences="on",
        )
        return result.text

    async def list_glossaries(self) -> list[Any]:
        """Return the glossaries registered with the account."""
        return list(await self._call("list glossaries", "list_glossaries"))

    async def delete_glossary(self, glossary: Any) -> None:
        """Delete a glossary."""
        await self._call("delete glossary", "delete_glossary", glossary)

    async def create_glossary(self, name: str, entries: dict[str, str]) -> Any:
        """
        Create a glossary from source-term to target-term entries.

        Args:
            name: Glossary name
            entries: Mapping of source terms to translations

        Returns:
            The created glossary info
        """
        return await self._call(
            "create glossary",
            "create_glossary",
            name,
            source_lang=self._config.source_lang,
            target_lang=self._config.glossary_target_lang,
            entries=entries,
        )
