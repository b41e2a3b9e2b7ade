"""Tests for bestseller page parsing and fetching."""

import httpx
import pytest

from listing_scout.config import Settings
from listing_scout.scoring.extractor import parse_review_count
from listing_scout.services.bestsellers import (
    BestsellerFetcher,
    BestsellerFetchError,
    build_bestseller_url,
    parse_bestseller_page,
)

SECTION_PAGE = """
<html><body>
  <div data-testid="category-section">
    <h2>Home &amp; Kitchen</h2>
    <div data-testid="product-card">
      <span class="zg-badge-text">#3</span>
      <a href="https://www.amazon.in/dp/B0TEST1"><h3>Stainless Steel Water Bottle 1 Litre</h3></a>
      <span class="a-price"><span class="a-offscreen">₹499.00</span></span>
      <span class="a-size-small"><span class="a-size-base">2,345</span></span>
    </div>
    <div data-testid="product-card"><div></div></div>
  </div>
  <div data-testid="category-section">
    <h2>Books</h2>
    <div class="a-carousel-card">
      <h3>The Psychology of Money Paperback</h3>
      <span class="a-price-whole">299</span>
      <span>#1 in Books · 88,120 ratings</span>
    </div>
  </div>
</body></html>
"""

FALLBACK_PAGE = """
<html><body>
  <div class="zg-item"><h3>Yoga Mat Anti Slip 6mm</h3><span class="a-price-whole">799</span>
    <span>1,024 ratings</span></div>
  <div class="zg-item"><h3>Adjustable Dumbbell Pair 5kg</h3><span class="a-price-whole">1,499</span></div>
  <div class="zg-item"><h3>Skipping Rope with Counter</h3><span class="a-price-whole">349</span></div>
</body></html>
"""


class TestBuildBestsellerUrl:
    """Tests for bestseller URL construction."""

    def test_landing_page(self) -> None:
        assert build_bestseller_url("all", "https://www.amazon.in") == (
            "https://www.amazon.in/gp/bestsellers"
        )

    def test_category(self) -> None:
        assert build_bestseller_url("books", "https://www.amazon.in/") == (
            "https://www.amazon.in/gp/bestsellers/books"
        )


class TestParseBestsellerPage:
    """Tests for HTML parsing."""

    def test_category_sections(self) -> None:
        listings = parse_bestseller_page(SECTION_PAGE)

        assert len(listings) == 2
        bottle, book = listings

        assert bottle.title == "Stainless Steel Water Bottle 1 Litre"
        assert bottle.price_text == "₹499.00"
        assert bottle.review_text == "2,345"
        assert bottle.rank_badge_text == "#3"
        assert bottle.category_hint == "Home & Kitchen"
        assert bottle.source_url == "https://www.amazon.in/dp/B0TEST1"

        assert book.category_hint == "Books"
        assert book.price_text == "299"
        assert book.review_text == "88,120 ratings"
        assert book.rank_badge_text == "#1"
        assert book.source_url is None

    def test_fallback_selectors(self) -> None:
        listings = parse_bestseller_page(FALLBACK_PAGE, category_label="Sports & Fitness")

        assert [listing.title for listing in listings] == [
            "Yoga Mat Anti Slip 6mm",
            "Adjustable Dumbbell Pair 5kg",
            "Skipping Rope with Counter",
        ]
        assert listings[0].review_text == "1,024 ratings"
        assert listings[0].rank_badge_text is None
        assert listings[1].review_text is None
        assert all(listing.category_hint == "Sports & Fitness" for listing in listings)

    def test_star_rating_not_taken_as_review_count(self) -> None:
        page = """
        <div class="zg-item"><h3>Handmade Jute Tote Bag Large</h3>
          <span class="a-price-whole">1,200</span>
          <i class="a-icon-star"><span class="a-icon-alt">4.3 out of 5 stars</span></i>
        </div>
        """

        listing = parse_bestseller_page(page)[0]

        assert listing.review_text is None
        assert parse_review_count("4.3 out of 5 stars") == 0

    def test_star_rating_next_to_count(self) -> None:
        page = """
        <div class="zg-item"><h3>Handmade Jute Tote Bag Large</h3>
          <span class="a-icon-alt">4.3 out of 5 stars</span><span>1,024 ratings</span>
        </div>
        """

        listing = parse_bestseller_page(page)[0]

        assert listing.review_text == "1,024 ratings"
        assert parse_review_count(listing.review_text) == 1024

    def test_limit(self) -> None:
        assert len(parse_bestseller_page(FALLBACK_PAGE, limit=2)) == 2
        assert len(parse_bestseller_page(SECTION_PAGE, limit=1)) == 1

    def test_no_cards(self) -> None:
        assert parse_bestseller_page("<html><body><p>Captcha</p></body></html>") == []


@pytest.fixture
def settings() -> Settings:
    """Settings with no delay between requests."""
    return Settings(
        marketplace_base_url="https://www.amazon.in",
        fetch_request_delay_seconds=0.0,
        fetch_max_concurrency=2,
    )


def _fetcher(settings: Settings, handler) -> BestsellerFetcher:
    return BestsellerFetcher(settings, transport=httpx.MockTransport(handler))


class TestBestsellerFetcher:
    """Tests for BestsellerFetcher."""

    @pytest.mark.asyncio
    async def test_fetch_category(self, settings: Settings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=FALLBACK_PAGE)

        listings = await _fetcher(settings, handler).fetch_category("sports-fitness")

        assert len(listings) == 3
        assert listings[0].category_hint == "Shoes & Handbags"
        assert str(seen[0].url) == "https://www.amazon.in/gp/bestsellers/sports-fitness"
        assert seen[0].headers["User-Agent"] == settings.user_agent

    @pytest.mark.asyncio
    async def test_http_error(self, settings: Settings) -> None:
        fetcher = _fetcher(settings, lambda request: httpx.Response(503))

        with pytest.raises(BestsellerFetchError, match="HTTP 503"):
            await fetcher.fetch_category("books")

    @pytest.mark.asyncio
    async def test_timeout(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(BestsellerFetchError, match="Timed out"):
            await _fetcher(settings, handler).fetch_category("books")

    @pytest.mark.asyncio
    async def test_connection_error(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BestsellerFetchError, match="request failed"):
            await _fetcher(settings, handler).fetch_category("books")

    @pytest.mark.asyncio
    async def test_page_without_cards(self, settings: Settings) -> None:
        fetcher = _fetcher(settings, lambda request: httpx.Response(200, text="<html></html>"))

        with pytest.raises(BestsellerFetchError, match="No product cards"):
            await fetcher.fetch_category("books")

    @pytest.mark.asyncio
    async def test_fetch_categories_skips_failures(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/books"):
                return httpx.Response(503)
            return httpx.Response(200, text=FALLBACK_PAGE)

        pages = await _fetcher(settings, handler).fetch_categories(
            ["toys-games", "books", "automotive"]
        )

        assert list(pages) == ["toys-games", "automotive"]
        assert pages["automotive"][0].category_hint == "Automotive"

    @pytest.mark.asyncio
    async def test_fetch_categories_all_fail(self, settings: Settings) -> None:
        fetcher = _fetcher(settings, lambda request: httpx.Response(500))

        with pytest.raises(BestsellerFetchError, match="All 2 category fetches failed"):
            await fetcher.fetch_categories(["books", "automotive"])
