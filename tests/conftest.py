"""Pytest fixtures for subscriber tests."""

from datetime import datetime, timezone

import pytest

from subscriber.subscriptions.config import SubscriptionsConfig
from subscriber.subscriptions.schemas import TrackedItem


@pytest.fixture
def now() -> datetime:
    """The instant every fixed clock reports."""
    return datetime(2021, 4, 1, tzinfo=timezone.utc)


@pytest.fixture
def earlier() -> datetime:
    """An instant well before `now`."""
    return datetime(2001, 9, 9, 1, 46, 40, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(now):
    """Clock that always reads `now`."""
    return lambda: now


@pytest.fixture
def source_url() -> str:
    return "https://example.com/artist/sample/"


@pytest.fixture
def detail_url() -> str:
    return "https://example.com/book/123/"


@pytest.fixture
def subscriptions_config() -> SubscriptionsConfig:
    """Default scraping config without inter-item delay."""
    return SubscriptionsConfig(sync_delay_seconds=0)


@pytest.fixture
def tracked_item(source_url, earlier) -> TrackedItem:
    """A subscription last refreshed long ago."""
    return TrackedItem(
        source_url=source_url,
        item_url="https://example.com/book/1/",
        title="古いタイトル",
        image_url="https://t1.example.com/old-image.jpg",
        author_name="古い作者名",
        last_updated_at=earlier,
        last_checked_at=earlier,
        priority=3,
        has_unseen_update=False,
    )
