"""Bulk synchronization and subscription lifecycle helpers."""

import asyncio
from collections.abc import Iterable

import structlog

from subscriber.subscriptions.config import SubscriptionsConfig
from subscriber.subscriptions.schemas import SyncOk, SyncResult, TrackedItem
from subscriber.subscriptions.synchronizer import SubscriptionSynchronizer

logger = structlog.get_logger(__name__)


def sort_by_priority(items: Iterable[TrackedItem]) -> list[TrackedItem]:
    """Order records highest priority first (stable for ties)."""
    return sorted(items, key=lambda item: item.priority, reverse=True)


def select_stalest(items: Iterable[TrackedItem]) -> TrackedItem | None:
    """Return the record checked longest ago, or None if there are none."""
    return min(items, key=lambda item: item.last_checked_at, default=None)


class SubscriptionSyncService:
    """
    Drive the synchronizer over many records.

    Records are processed one at a time with a pause between them so a
    catalog site is not hit in bursts. A failed pass is reported in the
    results and does not stop the remaining records.

    Usage:
        async with DocumentFetcher() as fetcher:
            service = SubscriptionSyncService(SubscriptionSynchronizer(fetcher))
            results = await service.sync_many(items)
    """

    def __init__(
        self,
        synchronizer: SubscriptionSynchronizer,
        config: SubscriptionsConfig | None = None,
    ) -> None:
        self._synchronizer = synchronizer
        self._config = config or SubscriptionsConfig()

    async def sync_many(self, items: Iterable[TrackedItem]) -> list[SyncResult]:
        """
        Synchronize records sequentially.

        Returns:
            One result per record, in input order
        """
        results: list[SyncResult] = []
        for index, item in enumerate(items):
            if index > 0 and self._config.sync_delay_seconds > 0:
                await asyncio.sleep(self._config.sync_delay_seconds)
            results.append(await self._synchronizer.synchronize(item))

        succeeded = sum(1 for r in results if isinstance(r, SyncOk))
        logger.info(
            "Bulk synchronization finished",
            total=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
        )
        return results

    async def sync_stalest(
        self, items: Iterable[TrackedItem]
    ) -> tuple[TrackedItem, SyncResult] | None:
        """
        Synchronize only the record checked longest ago.

        Returns:
            The chosen record with its result, or None when there are no records
        """
        item = select_stalest(items)
        if item is None:
            return None
        return item, await self._synchronizer.synchronize(item)

    async def subscribe(self, source_url: str, priority: int | None = None) -> SyncResult:
        """
        Create a subscription and populate it with a first pass.

        Args:
            source_url: Listing page to track
            priority: User ranking (default from config)
        """
        if priority is None:
            priority = self._config.default_priority
        item = TrackedItem.new(source_url, priority=priority)
        logger.info("Subscribing", source_url=source_url, priority=priority)
        return await self._synchronizer.synchronize(item)
