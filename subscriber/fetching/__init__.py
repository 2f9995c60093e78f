"""Document fetching: URL to parsed HTML document."""

from subscriber.fetching.fetcher import DocumentFetcher, FetchError, Fetcher, parse_document

__all__ = ["DocumentFetcher", "FetchError", "Fetcher", "parse_document"]
