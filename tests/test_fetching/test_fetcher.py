"""Tests for the document fetching layer."""

import httpx
import pytest
import respx

from subscriber.fetching.fetcher import DocumentFetcher, FetchError, parse_document


class TestParseDocument:
    """Tests for parse_document."""

    def test_supports_selector_queries(self):
        """Parsed documents expose query-all, attributes and text."""
        document = parse_document(
            '<div class="gallery" data-tags="1 2"><a href="/x"><span>Title</span></a></div>'
            '<div class="gallery" data-tags="3"></div>'
        )

        galleries = document.select("div.gallery")
        assert len(galleries) == 2
        assert galleries[0].get("data-tags") == "1 2"
        assert galleries[0].select_one("a span").get_text() == "Title"


class TestDocumentFetcher:
    """Tests for DocumentFetcher."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_success(self):
        """Should return the parsed body on success."""
        respx.get("https://example.com/page").mock(
            return_value=httpx.Response(200, text="<h2 class='title'>Hello</h2>")
        )

        async with DocumentFetcher() as fetcher:
            document = await fetcher.fetch("https://example.com/page")

        assert document.select_one("h2.title").get_text() == "Hello"

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_user_agent(self):
        """Should identify itself with the configured user agent."""
        route = respx.get("https://example.com/page").mock(
            return_value=httpx.Response(200, text="<p>ok</p>")
        )

        async with DocumentFetcher(headers={"X-Extra": "1"}) as fetcher:
            await fetcher.fetch("https://example.com/page")

        request = route.calls.last.request
        assert request.headers["User-Agent"].startswith("specific-page-subscriber")
        assert request.headers["X-Extra"] == "1"

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises(self):
        """Should raise FetchError carrying URL and status on HTTP errors."""
        respx.get("https://example.com/missing").mock(return_value=httpx.Response(404))

        async with DocumentFetcher() as fetcher:
            with pytest.raises(FetchError) as exc_info:
                await fetcher.fetch("https://example.com/missing")

        assert exc_info.value.url == "https://example.com/missing"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_not_retried(self):
        """Should fail on the first 5xx without retrying."""
        route = respx.get("https://example.com/flaky").mock(return_value=httpx.Response(503))

        async with DocumentFetcher() as fetcher:
            with pytest.raises(FetchError):
                await fetcher.fetch("https://example.com/flaky")

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_raises(self):
        """Should wrap connection errors in FetchError."""
        respx.get("https://example.com/down").mock(side_effect=httpx.ConnectError("refused"))

        async with DocumentFetcher() as fetcher:
            with pytest.raises(FetchError) as exc_info:
                await fetcher.fetch("https://example.com/down")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_redirects(self):
        """Should follow redirects to the final document."""
        respx.get("https://example.com/old").mock(
            return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
        )
        respx.get("https://example.com/new").mock(return_value=httpx.Response(200, text="<p>moved</p>"))

        async with DocumentFetcher() as fetcher:
            document = await fetcher.fetch("https://example.com/old")

        assert document.p.get_text() == "moved"

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        """Should refuse to fetch outside the context manager."""
        fetcher = DocumentFetcher()

        with pytest.raises(RuntimeError):
            await fetcher.fetch("https://example.com/page")
