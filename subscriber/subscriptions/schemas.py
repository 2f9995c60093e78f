"""
Data models for the subscriptions module.

TrackedItem is the persisted subscription record. Records are immutable:
a synchronization pass returns a new record and never edits the one it
was given.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRIORITY = 3


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class TrackedItem(BaseModel):
    """
    A favorited catalog page and the latest matching item found on it.

    ``source_url`` is the identity key and never changes. The scrape fields
    (item_url, title, image_url, author_name) describe the most recently
    found item and are written only by the synchronizer.
    """

    model_config = ConfigDict(frozen=True)

    source_url: str = Field(..., min_length=1, description="Tracked listing page")
    item_url: str = Field(default="", description="Most recently found matching item")
    title: str = Field(default="", description="Title of that item")
    image_url: str = Field(default="", description="Thumbnail of that item")
    author_name: str = Field(default="", description="Author of that item")

    last_updated_at: datetime = Field(default_factory=_utc_now)
    last_checked_at: datetime = Field(default_factory=_utc_now)

    priority: int = Field(default=DEFAULT_PRIORITY, description="User ranking")
    has_unseen_update: bool = False

    @classmethod
    def new(
        cls,
        source_url: str,
        priority: int = DEFAULT_PRIORITY,
        now: datetime | None = None,
    ) -> "TrackedItem":
        """Create a record for a freshly added subscription."""
        now = now or _utc_now()
        return cls(
            source_url=source_url,
            priority=priority,
            has_unseen_update=True,
            last_updated_at=now,
            last_checked_at=now,
        )


class SyncOutcome(str, Enum):
    """Which branch a successful pass took."""

    UPDATED = "updated"
    CHECKED_ONLY = "checked_only"


@dataclass(frozen=True)
class SyncOk:
    """The pass completed; ``record`` is the record to persist."""

    record: TrackedItem
    outcome: SyncOutcome


@dataclass(frozen=True)
class FetchFailure:
    """A document fetch failed; no record change is implied."""

    url: str
    cause: Exception

    @property
    def message(self) -> str:
        return f"Failed to fetch the document: {self.url} ({self.cause})"


@dataclass(frozen=True)
class UnexpectedError:
    """Anything else went wrong while extracting or diffing."""

    cause: Exception

    @property
    def message(self) -> str:
        return f"Unexpected error: {type(self.cause).__name__}: {self.cause}"


SyncResult = SyncOk | FetchFailure | UnexpectedError
