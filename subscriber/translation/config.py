"""Configuration for the translation service.

All settings can be overridden via TRANSLATION_* environment variables.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TranslationConfig(BaseSettings):
    """Settings for the DeepL-backed translation boundary.

    Example:
        TRANSLATION_DEEPL_API_KEY=xxxxxxxx-xxxx-...:fx
        TRANSLATION_TARGET_LANG=en-GB
    """

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    deepl_api_key: SecretStr | None = Field(
        default=None,
        description="DeepL authentication key",
    )

    source_lang: str = Field(default="ja", description="Language of the source strings")
    target_lang: str = Field(default="en-US", description="Language to translate into")

    # Glossary
    glossary_name: str = Field(default="SSW", description="Name given to the managed glossary")
    glossary_target_lang: str = Field(
        default="en",
        description="Glossary target language (glossaries take no regional variant)",
    )
    terms_url: str = Field(
        default="https://paratranz.cn/api/projects/1511/terms",
        description="Endpoint returning the term list used to build the glossary",
    )
    terms_page_size: int = Field(default=500, ge=1, le=1000)

    timeout: float = Field(default=30.0, gt=0.0, description="Terms fetch timeout in seconds")
