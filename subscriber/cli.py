"""
Command-line interface for specific-page-subscriber.

Provides commands to manage and synchronize page subscriptions and to
translate localization strings.

Usage:
    subscriber subscribe URL       # Track a listing page
    subscriber sync                # Check every subscription for new items
    subscriber sync --stalest      # Check only the longest-unchecked one
    subscriber list                # Show subscriptions by priority
    subscriber mark URL --seen     # Acknowledge the latest item
    subscriber unsubscribe URL     # Stop tracking a page
    subscriber translate TEXT      # Tag-safe translation
    subscriber refresh-glossary    # Rebuild the provider glossary
"""

import asyncio
import sys

import click

from subscriber.config.settings import get_settings
from subscriber.observability.logging import setup_logging
from subscriber.subscriptions.schemas import (
    FetchFailure,
    SyncOk,
    SyncOutcome,
    SyncResult,
    TrackedItem,
)

store_option = click.option(
    "--store",
    "store_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Subscription store file (default from settings)",
)


def _open_store(store_path: str | None):
    from subscriber.subscriptions.store import SubscriptionStore

    return SubscriptionStore(store_path or get_settings().store_path)


def _describe(item: TrackedItem, result: SyncResult) -> str:
    """Render one synchronization result as a single styled line."""
    if isinstance(result, SyncOk):
        if result.outcome is SyncOutcome.UPDATED:
            return click.style(
                f"  NEW  {item.source_url} -> {result.record.title}", fg="green"
            )
        return f"  ---  {item.source_url}"
    if isinstance(result, FetchFailure):
        return click.style(f"  FAIL {item.source_url}: {result.message}", fg="red")
    return click.style(f"  ERR  {item.source_url}: {result.message}", fg="red")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Specific Page Subscriber - catalog update tracking and translation."""
    setup_logging("DEBUG" if debug else None)


@main.command()
@click.argument("url")
@click.option("--priority", default=None, type=int, help="User ranking (higher first)")
@store_option
def subscribe(url: str, priority: int | None, store_path: str | None) -> None:
    """Start tracking a listing page."""
    from subscriber.fetching.fetcher import DocumentFetcher
    from subscriber.subscriptions.service import SubscriptionSyncService
    from subscriber.subscriptions.synchronizer import SubscriptionSynchronizer

    store = _open_store(store_path)
    if url in store.load():
        click.echo(f"Already subscribed: {url}")
        return

    async def run() -> SyncResult:
        async with DocumentFetcher() as fetcher:
            service = SubscriptionSyncService(SubscriptionSynchronizer(fetcher))
            return await service.subscribe(url, priority=priority)

    result = asyncio.run(run())
    if not isinstance(result, SyncOk):
        click.echo(click.style(f"Subscription failed: {result.message}", fg="red"))
        sys.exit(1)

    store.upsert(result.record)
    click.echo(f"Subscribed to {url}")


@main.command()
@click.argument("url")
@store_option
def unsubscribe(url: str, store_path: str | None) -> None:
    """Stop tracking a listing page."""
    if _open_store(store_path).remove(url):
        click.echo(f"Unsubscribed from {url}")
    else:
        click.echo(f"Not subscribed: {url}")
        sys.exit(1)


@main.command()
@click.option("--stalest", is_flag=True, help="Only check the longest-unchecked subscription")
@click.option("--metrics-file", default=None, type=click.Path(dir_okay=False), help="Write Prometheus metrics to this file")
@store_option
def sync(stalest: bool, metrics_file: str | None, store_path: str | None) -> None:
    """Check subscriptions for new items and persist the results."""
    from subscriber.fetching.fetcher import DocumentFetcher
    from subscriber.subscriptions.service import SubscriptionSyncService
    from subscriber.subscriptions.synchronizer import SubscriptionSynchronizer

    store = _open_store(store_path)
    items = store.load()
    if not items:
        click.echo("No subscriptions to check")
        return

    async def run() -> list[tuple[TrackedItem, SyncResult]]:
        async with DocumentFetcher() as fetcher:
            service = SubscriptionSyncService(SubscriptionSynchronizer(fetcher))
            if stalest:
                checked = await service.sync_stalest(items.values())
                return [checked] if checked is not None else []
            targets = list(items.values())
            return list(zip(targets, await service.sync_many(targets)))

    results = asyncio.run(run())

    failed = 0
    for item, result in results:
        click.echo(_describe(item, result))
        if isinstance(result, SyncOk):
            items[item.source_url] = result.record
        else:
            failed += 1

    store.save(items)

    metrics_file = metrics_file or get_settings().metrics_file
    if metrics_file:
        from subscriber.observability.metrics import get_metrics

        get_metrics().write_textfile(metrics_file)

    if failed:
        click.echo(click.style(f"{failed} of {len(results)} checks failed", fg="red"))
        sys.exit(1)


@main.command("list")
@store_option
def list_subscriptions(store_path: str | None) -> None:
    """Show subscriptions, highest priority first."""
    from subscriber.subscriptions.service import sort_by_priority

    items = sort_by_priority(_open_store(store_path).load().values())
    if not items:
        click.echo("No subscriptions")
        return

    for item in items:
        marker = click.style("NEW ", fg="green") if item.has_unseen_update else "    "
        checked = item.last_checked_at.strftime("%Y-%m-%d %H:%M")
        click.echo(f"{marker}[{item.priority}] {item.title or '-'}  ({item.source_url}, checked {checked})")


@main.command()
@click.argument("url")
@click.option("--unseen/--seen", default=False, help="Mark the latest item as unseen or seen")
@store_option
def mark(url: str, unseen: bool, store_path: str | None) -> None:
    """Acknowledge (or re-flag) the latest item of a subscription."""
    store = _open_store(store_path)
    item = store.load().get(url)
    if item is None:
        click.echo(f"Not subscribed: {url}")
        sys.exit(1)

    store.upsert(item.model_copy(update={"has_unseen_update": unseen}))
    click.echo(f"Marked {url} as {'unseen' if unseen else 'seen'}")


@main.command()
@click.argument("text")
@click.option("--adjective", is_flag=True, help="Translate a country name into its adjective")
@click.option("--key", default=None, help="Localization key; picks the mode from its suffix")
def translate(text: str, adjective: bool, key: str | None) -> None:
    """Translate a localization string, keeping its decorations intact."""
    from subscriber.translation.client import TranslationError
    from subscriber.translation.service import TranslationService

    service = TranslationService()

    async def run() -> str:
        if key is not None:
            return await service.translate_entry(key, text)
        return await service.translate(text, is_adjective_country_name=adjective)

    try:
        click.echo(asyncio.run(run()))
    except TranslationError as e:
        click.echo(click.style(f"Translation failed: {e}", fg="red"), err=True)
        sys.exit(1)


@main.command("refresh-glossary")
def refresh_glossary() -> None:
    """Replace the provider glossary with the current term list."""
    from subscriber.translation.client import TranslationError
    from subscriber.translation.service import TranslationService

    try:
        count = asyncio.run(TranslationService().refresh_glossary())
    except TranslationError as e:
        click.echo(click.style(f"Glossary refresh failed: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Glossary created with {count} entries")


@main.command()
@click.argument("text")
def encode(text: str) -> None:
    """Convert delimiter markup to HTML-like tags."""
    from subscriber.translation.transcoder import encode as encode_text

    click.echo(encode_text(text))


@main.command()
@click.argument("text")
def decode(text: str) -> None:
    """Convert HTML-like tags back to delimiter markup."""
    from subscriber.translation.transcoder import decode as decode_text

    click.echo(decode_text(text))


if __name__ == "__main__":
    main()
