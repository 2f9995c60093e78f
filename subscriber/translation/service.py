"""Translation service: tag-safe translation of localization strings.

Wraps the provider call with the delimiter transcoder so that decorated
regions survive machine translation, and manages the glossary the
provider applies to every request.
"""

import re
from enum import Enum

import httpx
import structlog

from subscriber.observability.metrics import get_metrics
from subscriber.translation.client import TranslationError, TranslatorClient
from subscriber.translation.config import TranslationConfig
from subscriber.translation.transcoder import decode, encode

logger = structlog.get_logger(__name__)

# Country names are translated inside a nationality phrase so the
# provider produces the adjective form ("Japanese", not "Japan")
ADJECTIVE_TEMPLATE = "<p><span>{text}</span>国籍</p>"
_SPAN_PATTERN = re.compile(r"<span>(.+)</span>")

DEFINITION_PREFIX = "the "


class TranslationMode(str, Enum):
    """How a localization entry should be translated."""

    NORMAL = "normal"
    DEFINITION = "definition"
    ADJECTIVE = "adjective"

    @classmethod
    def from_key(cls, key: str) -> "TranslationMode":
        """Infer the mode from a localization key suffix."""
        key = key.strip()
        if key.endswith("DEF:0"):
            return cls.DEFINITION
        if key.endswith("ADJ:0"):
            return cls.ADJECTIVE
        return cls.NORMAL


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


class TranslationService:
    """
    Translate localization strings and maintain the provider glossary.

    Usage:
        service = TranslationService()
        await service.translate("§Y東京§!へようこそ")
        await service.translate_entry("COUNTRY_JPN_ADJ:0", "日本")
    """

    def __init__(
        self,
        config: TranslationConfig | None = None,
        client: TranslatorClient | None = None,
    ) -> None:
        self._config = config or TranslationConfig()
        self._client = client or TranslatorClient(self._config)
        self._metrics = get_metrics()

    async def translate(self, text: str, is_adjective_country_name: bool = False) -> str:
        """
        Translate one string.

        Args:
            text: Source text in delimiter notation
            is_adjective_country_name: Translate a country name into its
                adjective form instead of running the normal pipeline

        Returns:
            Translated text in delimiter notation

        Raises:
            TranslationError: If the provider fails
        """
        mode = TranslationMode.ADJECTIVE if is_adjective_country_name else TranslationMode.NORMAL
        try:
            glossaries = await self._client.list_glossaries()
            glossary = glossaries[0] if glossaries else None

            if is_adjective_country_name:
                translated = await self._client.translate(
                    ADJECTIVE_TEMPLATE.format(text=text), glossary=glossary
                )
                match = _SPAN_PATTERN.search(translated)
                result = match.group(1) if match else translated
            else:
                translated = await self._client.translate(encode(text), glossary=glossary)
                result = _capitalize_first(decode(translated))
        except TranslationError:
            self._metrics.record_translation(mode.value, success=False)
            raise

        self._metrics.record_translation(mode.value, success=True)
        logger.debug("Translated text", mode=mode.value, length=len(text))
        return result

    async def translate_entry(self, key: str, text: str) -> str:
        """
        Translate a localization entry, choosing the mode from its key.

        Definition entries get a leading article; empty text is returned
        as-is without calling the provider.
        """
        if text == "":
            return ""

        mode = TranslationMode.from_key(key)
        translated = await self.translate(
            text, is_adjective_country_name=mode is TranslationMode.ADJECTIVE
        )
        if mode is TranslationMode.DEFINITION:
            return DEFINITION_PREFIX + translated
        return translated

    async def refresh_glossary(self) -> int:
        """
        Replace every registered glossary with one built from the terms source.

        Returns:
            Number of entries in the new glossary

        Raises:
            TranslationError: If the terms fetch or any provider call fails
        """
        glossaries = await self._client.list_glossaries()
        for glossary in glossaries:
            await self._client.delete_glossary(glossary)
        logger.info("Deleted glossaries", count=len(glossaries))

        entries = await self._fetch_terms()
        await self._client.create_glossary(self._config.glossary_name, entries)
        logger.info(
            "Created glossary",
            name=self._config.glossary_name,
            entries=len(entries),
        )
        return len(entries)

    async def _fetch_terms(self) -> dict[str, str]:
        """Fetch the term list and map each term to its translation."""
        params = {"page": 1, "pageSize": self._config.terms_page_size}
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                response = await client.get(self._config.terms_url, params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TranslationError(f"Failed to fetch glossary terms: {e}") from e

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise TranslationError("Glossary terms response has no results list")

        # Malformed or untranslated entries are skipped
        return {
            term["term"]: term["translation"]
            for term in results
            if isinstance(term, dict) and term.get("term") and term.get("translation")
        }
