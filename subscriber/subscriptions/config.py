"""Configuration for subscription synchronization."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from subscriber.subscriptions.schemas import DEFAULT_PRIORITY


class SubscriptionsConfig(BaseSettings):
    """Selectors, markers and placeholders used when scraping catalog pages.

    Settings can be overridden via environment variables prefixed with
    SUBSCRIPTIONS_ (list values as JSON arrays).
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBSCRIPTIONS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Listing page
    language_tag: str = Field(
        default="6346",
        description="Tag id a candidate must carry to count as a match (Japanese)",
    )
    candidate_selector: str = Field(default="div.gallery")
    tags_attribute: str = Field(default="data-tags")
    thumbnail_selector: str = Field(default="img")
    thumbnail_attribute: str = Field(default="data-src")
    canonical_thumbnail_subdomain: str = Field(
        default="t1",
        description="Thumbnail host label every image URL is rewritten to",
    )

    # Detail page, tried in order until one yields text
    title_selectors: list[str] = Field(
        default_factory=lambda: ["h2.title span.pretty", "h1.title span.pretty"],
    )
    author_selectors: list[str] = Field(
        default_factory=lambda: ["h2.title span.before", "h1.title span.before"],
    )

    # Placeholders stored when a field cannot be extracted
    extraction_failed_placeholder: str = "extraction failed"
    missing_image_placeholder: str = "undefined"

    default_priority: int = DEFAULT_PRIORITY
    sync_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Pause between records when synchronizing in bulk",
    )
