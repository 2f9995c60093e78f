"""Shared fixtures for subscriptions tests."""

import pytest

from subscriber.fetching.fetcher import FetchError, parse_document

LISTING_HTML = """
<html><body>
<div class="container index-container">
  <div class="gallery" data-tags="12227 29963">
    <a href="/book/200/" class="cover">
      <img class="lazyload" data-src="https://t5.example.com/galleries/200/thumb.jpg">
      <div class="caption">English edition</div>
    </a>
  </div>
  <div class="gallery" data-tags="6346 29963">
    <a href="/book/123/" class="cover">
      <img class="lazyload" data-src="https://t3.example.com/galleries/123/thumbnail.jpg">
      <div class="caption">日本語タイトル</div>
    </a>
  </div>
  <div class="gallery" data-tags="6346">
    <a href="/book/99/" class="cover">
      <img class="lazyload" data-src="https://t2.example.com/galleries/99/thumbnail.jpg">
      <div class="caption">もっと古いタイトル</div>
    </a>
  </div>
</div>
</body></html>
"""

NO_JAPANESE_LISTING_HTML = """
<html><body>
<div class="container index-container">
  <div class="gallery" data-tags="12227 63460">
    <a href="/book/200/" class="cover"><img data-src="https://t5.example.com/galleries/200/thumb.jpg"></a>
  </div>
  <div class="gallery" data-tags="29963">
    <a href="/book/201/" class="cover"><img data-src="https://t5.example.com/galleries/201/thumb.jpg"></a>
  </div>
</div>
</body></html>
"""

DETAIL_HTML = """
<html><body>
<div id="info">
  <h1 class="title"><span class="before">[Other Layout] </span><span class="pretty">Romanized Title</span></h1>
  <h2 class="title"><span class="before">Author Name</span><span class="pretty">日本語タイトル</span><span class="after"></span></h2>
</div>
</body></html>
"""

FALLBACK_DETAIL_HTML = """
<html><body>
<div id="info">
  <h1 class="title"><span class="before">Fallback Author</span><span class="pretty">Fallback Title</span></h1>
</div>
</body></html>
"""

BARE_DETAIL_HTML = """
<html><body><div id="info"><p>Nothing useful here</p></div></body></html>
"""


class FakeFetcher:
    """In-memory fetcher serving fixed pages and recording every call."""

    def __init__(self, pages: dict[str, str]):
        self.pages = pages
        self.calls: list[str] = []

    async def fetch(self, url: str):
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, f"Request to {url} failed with status 404", status_code=404)
        return parse_document(self.pages[url])


@pytest.fixture
def listing_html() -> str:
    return LISTING_HTML


@pytest.fixture
def no_japanese_listing_html() -> str:
    return NO_JAPANESE_LISTING_HTML


@pytest.fixture
def detail_html() -> str:
    return DETAIL_HTML


@pytest.fixture
def fallback_detail_html() -> str:
    return FALLBACK_DETAIL_HTML


@pytest.fixture
def bare_detail_html() -> str:
    return BARE_DETAIL_HTML


@pytest.fixture
def make_fetcher():
    """Factory building a FakeFetcher from a url -> html mapping."""
    return FakeFetcher
