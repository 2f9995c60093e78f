"""Translation: delimiter/tag transcoding and the DeepL boundary."""

from subscriber.translation.client import TranslationError, TranslatorClient
from subscriber.translation.config import TranslationConfig
from subscriber.translation.service import TranslationMode, TranslationService
from subscriber.translation.transcoder import decode, encode

__all__ = [
    "TranslationConfig",
    "TranslationError",
    "TranslationMode",
    "TranslationService",
    "TranslatorClient",
    "decode",
    "encode",
]
