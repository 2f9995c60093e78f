"""Subscriptions: tracked catalog pages and their synchronization."""

from subscriber.subscriptions.config import SubscriptionsConfig
from subscriber.subscriptions.schemas import (
    FetchFailure,
    SyncOk,
    SyncOutcome,
    SyncResult,
    TrackedItem,
    UnexpectedError,
)
from subscriber.subscriptions.service import (
    SubscriptionSyncService,
    select_stalest,
    sort_by_priority,
)
from subscriber.subscriptions.store import SubscriptionStore
from subscriber.subscriptions.synchronizer import SubscriptionSynchronizer

__all__ = [
    "FetchFailure",
    "SubscriptionStore",
    "SubscriptionSyncService",
    "SubscriptionSynchronizer",
    "SubscriptionsConfig",
    "SyncOk",
    "SyncOutcome",
    "SyncResult",
    "TrackedItem",
    "UnexpectedError",
    "select_stalest",
    "sort_by_priority",
]
