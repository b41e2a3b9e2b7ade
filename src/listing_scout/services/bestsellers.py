"""Marketplace bestseller page fetcher and parser.

Fetches bestseller pages and turns each product card into a RawListing.
Only text is collected here; extraction, classification and scoring happen
in the pipeline.

Failures (HTTP errors, timeouts, pages with no product cards) raise
BestsellerFetchError so the caller can fall back to the seed batch.
"""

import asyncio
import logging
import re
from collections.abc import Iterable

import httpx
from bs4 import BeautifulSoup, Tag

from listing_scout.config import Settings, get_settings
from listing_scout.scoring.keywords import MARKETPLACE_CATEGORIES
from listing_scout.scoring.models import RawListing

logger = logging.getLogger(__name__)


class BestsellerFetchError(Exception):
    """Exception raised when a bestseller page cannot be fetched or parsed."""

    pass


# Card selectors inside a category section, then page-wide fallbacks
SECTION_CARD_SELECTOR = (
    'div[data-testid="grid-deals-container"] > div, '
    '.a-carousel-card, [data-testid="product-card"]'
)
FALLBACK_CARD_SELECTORS: tuple[str, ...] = (
    '[data-testid="product-card"]',
    ".zg-item-immersion",
    ".zg-item",
    'div[data-testid="deal-card"]',
    ".a-carousel-card",
)

_REVIEW_PHRASE = re.compile(r"\d+(?:,\d+)*\s*(?:reviews?|ratings?)", re.IGNORECASE)
_RANK_BADGE = re.compile(r"#\d[\d,]*")


def build_bestseller_url(category: str = "all", base_url: str | None = None) -> str:
    """Build the bestseller URL for a category slug ("all" for the landing page)."""
    if base_url is None:
        base_url = get_settings().marketplace_base_url
    base = base_url.rstrip("/")
    if category == "all":
        return f"{base}/gp/bestsellers"
    return f"{base}/gp/bestsellers/{category}"


def _first_text(card: Tag, selectors: Iterable[str]) -> str:
    for selector in selectors:
        element = card.select_one(selector)
        if element:
            text = element.get_text(" ", strip=True)
            if text:
                return text
    return ""


def _parse_card(card: Tag, category_label: str | None) -> RawListing | None:
    """Collect the raw text fields of one product card."""
    title = _first_text(
        card,
        (
            '[data-testid="product-title"]',
            "h3",
            'a[data-testid="deal-link"] span',
            ".a-link-normal span",
            "span",
        ),
    )
    if not title:
        return None

    card_text = card.get_text(" ", strip=True)

    review_text = _first_text(
        card,
        (".a-size-small .a-size-base", '[data-testid="review-count"]'),
    )
    if not review_text:
        match = _REVIEW_PHRASE.search(card_text)
        review_text = match.group(0) if match else ""

    rank_text = _first_text(card, (".zg-badge-text", ".a-badge-text"))
    if not rank_text:
        match = _RANK_BADGE.search(card_text)
        rank_text = match.group(0) if match else ""

    link = card.find("a", href=True)
    source_url = link["href"] if link else None

    return RawListing(
        title=title,
        price_text=_first_text(
            card,
            (".a-price .a-offscreen", ".a-price-whole", '[data-testid="price"]', ".a-price"),
        )
        or None,
        review_text=review_text or None,
        rank_badge_text=rank_text or None,
        category_hint=category_label,
        source_url=source_url,
    )


def parse_bestseller_page(
    html: str,
    category_label: str | None = None,
    limit: int = 50,
) -> list[RawListing]:
    """Parse a bestseller page into raw listings.

    Category sections are tried first so each card inherits its section
    heading. Otherwise the first page-wide selector that yields cards wins.

    Args:
        html: Raw page HTML
        category_label: Label to attach when the page has no section headings
        limit: Maximum listings to return

    Returns:
        Raw listings in page order (may be empty)
    """
    soup = BeautifulSoup(html, "html.parser")
    listings: list[RawListing] = []

    for section in soup.select('div[data-testid="category-section"]'):
        heading = section.find("h2") or section.select_one('[data-testid="category-title"]')
        section_label = heading.get_text(strip=True) if heading else category_label
        for card in section.select(SECTION_CARD_SELECTOR):
            if len(listings) >= limit:
                return listings
            listing = _parse_card(card, section_label)
            if listing:
                listings.append(listing)

    if listings:
        return listings

    for selector in FALLBACK_CARD_SELECTORS:
        for card in soup.select(selector):
            if len(listings) >= limit:
                break
            listing = _parse_card(card, category_label)
            if listing:
                listings.append(listing)
        if listings:
            break

    return listings


class BestsellerFetcher:
    """Fetches bestseller pages with a bounded number of concurrent requests.

    Usage:
        fetcher = BestsellerFetcher()
        listings = await fetcher.fetch_category("home-kitchen")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize fetcher.

        Args:
            settings: Application settings (uses cached settings if None).
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.settings = settings or get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.fetch_timeout_seconds,
            transport=self._transport,
            follow_redirects=True,
            headers={
                "User-Agent": self.settings.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            },
        )

    async def _fetch_with(self, client: httpx.AsyncClient, category: str) -> list[RawListing]:
        url = build_bestseller_url(category, self.settings.marketplace_base_url)
        logger.info(f"Fetching bestsellers: {url}")

        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise BestsellerFetchError(f"Timed out fetching {url}") from e
        except httpx.HTTPStatusError as e:
            raise BestsellerFetchError(
                f"Bestseller page returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise BestsellerFetchError(f"Bestseller request failed: {e}") from e

        listings = parse_bestseller_page(
            response.text,
            category_label=MARKETPLACE_CATEGORIES.get(category),
            limit=self.settings.max_listings_per_page,
        )
        if not listings:
            raise BestsellerFetchError(f"No product cards found on {url}")

        logger.info(f"Parsed {len(listings)} listings for category '{category}'")
        return listings

    async def fetch_category(self, category: str = "all") -> list[RawListing]:
        """Fetch and parse one bestseller page.

        Raises:
            BestsellerFetchError: If the page cannot be fetched or has no cards
        """
        async with self._client() as client:
            return await self._fetch_with(client, category)

    async def fetch_categories(self, categories: list[str]) -> dict[str, list[RawListing]]:
        """Fetch several categories, honouring the concurrency bound and delay.

        Categories that fail are logged and left out of the result.

        Raises:
            BestsellerFetchError: If every category failed
        """
        semaphore = asyncio.Semaphore(self.settings.fetch_max_concurrency)
        results: dict[str, list[RawListing]] = {}

        async with self._client() as client:

            async def fetch_one(category: str) -> None:
                async with semaphore:
                    try:
                        results[category] = await self._fetch_with(client, category)
                    except BestsellerFetchError as e:
                        logger.warning(f"Skipping category '{category}': {e}")
                    finally:
                        await asyncio.sleep(self.settings.fetch_request_delay_seconds)

            await asyncio.gather(*(fetch_one(category) for category in categories))

        if not results:
            raise BestsellerFetchError(f"All {len(categories)} category fetches failed")

        # Preserve the requested category order
        return {category: results[category] for category in categories if category in results}
