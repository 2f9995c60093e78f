"""JSON file store for subscription records, keyed by source URL."""

import json
import logging
from pathlib import Path

from subscriber.subscriptions.schemas import TrackedItem

logger = logging.getLogger(__name__)


class SubscriptionStore:
    """Load and save TrackedItem records as a JSON array.

    A missing file reads as an empty store. Writes go to a temporary file
    that replaces the original, so a crash never leaves a half-written store.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, TrackedItem]:
        """Return all records by source URL."""
        if not self._path.exists():
            return {}
        with open(self._path, encoding="utf-8") as f:
            entries = json.load(f)
        items = [TrackedItem.model_validate(entry) for entry in entries]
        return {item.source_url: item for item in items}

    def save(self, items: dict[str, TrackedItem]) -> None:
        """Replace the stored records."""
        payload = [item.model_dump(mode="json") for item in items.values()]
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self._path)
        logger.debug(f"Saved {len(payload)} subscriptions to {self._path}")

    def upsert(self, item: TrackedItem) -> None:
        """Insert or replace one record."""
        items = self.load()
        items[item.source_url] = item
        self.save(items)

    def remove(self, source_url: str) -> bool:
        """Delete one record. Returns False if it was not stored."""
        items = self.load()
        if items.pop(source_url, None) is None:
            return False
        self.save(items)
        return True
