"""
Subscription synchronizer: fetch, parse and diff one tracked page.

A pass walks these states:

    start -> listing fetched -> {no match, candidate found}
          -> detail fetched -> {same title, new title} -> done

and ends in exactly one result:
- SyncOk(UPDATED): a new item was found, scrape fields replaced
- SyncOk(CHECKED_ONLY): nothing new, only last_checked_at advanced
- FetchFailure: the listing or detail fetch failed
- UnexpectedError: anything else (page structure not as expected, etc.)

Failures are returned, never raised, so callers can synchronize many
records without one failure aborting the rest. The synchronizer holds no
per-call state and may run concurrently across distinct records.
"""

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from subscriber.fetching.fetcher import FetchError, Fetcher
from subscriber.observability.metrics import get_metrics
from subscriber.subscriptions.config import SubscriptionsConfig
from subscriber.subscriptions.extraction import (
    extract_thumbnail,
    find_candidate,
    first_match,
    normalize_thumbnail_url,
    resolve_item_url,
    strategies_for,
)
from subscriber.subscriptions.schemas import (
    FetchFailure,
    SyncOk,
    SyncOutcome,
    SyncResult,
    TrackedItem,
    UnexpectedError,
)

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubscriptionSynchronizer:
    """
    Determine whether a tracked page has a new matching item.

    Usage:
        async with DocumentFetcher() as fetcher:
            synchronizer = SubscriptionSynchronizer(fetcher)
            result = await synchronizer.synchronize(item)
    """

    def __init__(
        self,
        fetcher: Fetcher,
        config: SubscriptionsConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize synchronizer.

        Args:
            fetcher: Resolves URLs to parsed documents
            config: Selectors and placeholders (defaults from environment)
            clock: Source of "now" (timezone-aware)
        """
        self._fetcher = fetcher
        self._config = config or SubscriptionsConfig()
        self._clock = clock or _utc_now
        self._title_strategies = strategies_for(self._config.title_selectors)
        self._author_strategies = strategies_for(self._config.author_selectors)
        self._metrics = get_metrics()

    async def synchronize(self, item: TrackedItem) -> SyncResult:
        """
        Run one synchronization pass for a record.

        Args:
            item: Current record; it is never modified

        Returns:
            SyncOk with the record to persist, or an error value
        """
        try:
            result = await self._synchronize(item)
        except Exception as e:
            result = UnexpectedError(e)

        self._log_result(item, result)
        return result

    async def _synchronize(self, item: TrackedItem) -> SyncResult:
        config = self._config

        try:
            listing = await self._fetcher.fetch(item.source_url)
        except FetchError as e:
            return FetchFailure(url=item.source_url, cause=e)

        candidate = find_candidate(
            listing,
            config.candidate_selector,
            config.tags_attribute,
            config.language_tag,
        )
        if candidate is None:
            return self._checked_only(item)

        item_url = resolve_item_url(candidate, item.source_url)

        try:
            detail = await self._fetcher.fetch(item_url)
        except FetchError as e:
            return FetchFailure(url=item_url, cause=e)

        title = first_match(detail, self._title_strategies)
        if title == item.title:
            return self._checked_only(item)

        author = first_match(detail, self._author_strategies)
        image_url = extract_thumbnail(
            candidate, config.thumbnail_selector, config.thumbnail_attribute
        )
        if image_url is None:
            image_url = config.missing_image_placeholder
        else:
            image_url = normalize_thumbnail_url(
                image_url, config.canonical_thumbnail_subdomain
            )

        # One reading for both timestamps keeps last_checked_at >= last_updated_at
        now = self._clock()
        record = item.model_copy(
            update={
                "title": title if title is not None else config.extraction_failed_placeholder,
                "author_name": author if author is not None else config.extraction_failed_placeholder,
                "image_url": image_url,
                "item_url": item_url,
                "has_unseen_update": True,
                "last_updated_at": now,
                "last_checked_at": now,
            }
        )
        return SyncOk(record=record, outcome=SyncOutcome.UPDATED)

    def _checked_only(self, item: TrackedItem) -> SyncOk:
        record = item.model_copy(update={"last_checked_at": self._clock()})
        return SyncOk(record=record, outcome=SyncOutcome.CHECKED_ONLY)

    def _log_result(self, item: TrackedItem, result: SyncResult) -> None:
        if isinstance(result, SyncOk):
            self._metrics.record_sync_result(result.outcome.value)
            if result.outcome is SyncOutcome.UPDATED:
                logger.info(
                    "New item found",
                    source_url=item.source_url,
                    item_url=result.record.item_url,
                    title=result.record.title,
                )
            else:
                logger.debug("No new item", source_url=item.source_url)
        elif isinstance(result, FetchFailure):
            self._metrics.record_sync_result("fetch_failure")
            logger.warning(
                "Document fetch failed",
                source_url=item.source_url,
                url=result.url,
                error=str(result.cause),
            )
        else:
            self._metrics.record_sync_result("unexpected_error")
            logger.error(
                "Synchronization failed",
                source_url=item.source_url,
                error=str(result.cause),
                error_type=type(result.cause).__name__,
            )
