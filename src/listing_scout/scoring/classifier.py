"""Keyword-based attribute classification.

All checks are case-insensitive and read their terms from
``listing_scout.scoring.keywords``. The flag checks use plain substring
matching; category guessing, consumable detection and the non-product check
match whole words.
"""

import hashlib
import logging
import random
import re
from datetime import date, timedelta
from functools import lru_cache
from urllib.parse import quote_plus

from listing_scout.scoring import keywords
from listing_scout.scoring.extractor import resolve_numbers
from listing_scout.scoring.models import (
    ClassifiedListing,
    FallbackRanges,
    ListingFlags,
    RawListing,
    ScoringConfig,
)
from listing_scout.scoring.scorer import (
    calculate_branding_potential,
    calculate_points,
    opportunity_tier,
)

logger = logging.getLogger(__name__)

DEFAULT_MARKETPLACE_URL = "https://www.amazon.in"


def _contains_any(text: str | None, terms: tuple[str, ...]) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(term in lowered for term in terms)


@lru_cache(maxsize=None)
def _word_pattern(terms: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(term) for term in terms)
    return re.compile(rf"\b(?:{alternatives})(?:s|es)?\b", re.IGNORECASE)


def _contains_any_word(text: str | None, terms: tuple[str, ...]) -> bool:
    if not text:
        return False
    return _word_pattern(terms).search(text) is not None


# --- Flags ---


def is_platform_brand(title: str, brand: str | None = None) -> bool:
    """True if the title or brand names a marketplace house brand."""
    return _contains_any(title, keywords.PLATFORM_BRAND_TERMS) or _contains_any(
        brand, keywords.PLATFORM_BRAND_TERMS
    )


def is_fragile(title: str, category: str | None = None) -> bool:
    """True if the title or category mentions a breakable material."""
    return _contains_any(title, keywords.FRAGILE_TERMS) or _contains_any(
        category, keywords.FRAGILE_TERMS
    )


def is_perishable(category: str | None) -> bool:
    """True for grocery, food and beverage categories."""
    return _contains_any(category, keywords.PERISHABLE_CATEGORY_TERMS)


def has_size_ambiguity(title: str) -> bool:
    """True if the title carries clothing-size or fit wording."""
    return _contains_any(title, keywords.SIZE_AMBIGUITY_TERMS)


def is_electronics(title: str, category: str | None = None) -> bool:
    """True if the title or category looks like electronics or an appliance."""
    return _contains_any(title, keywords.ELECTRONICS_TERMS) or _contains_any(
        category, keywords.ELECTRONICS_TERMS
    )


def is_consumable(title: str, category: str | None = None) -> bool:
    """True for consumption/living goods, perishables included."""
    return is_perishable(category) or _contains_any_word(title, keywords.CONSUMABLE_TERMS)


def is_valid_listing(title: str | None) -> bool:
    """Reject too-short titles, navigation artifacts and non-product entries."""
    if not title:
        return False

    stripped = title.strip()
    if len(stripped) < keywords.MIN_TITLE_LENGTH:
        return False

    if any(artifact in stripped for artifact in keywords.NAVIGATION_ARTIFACTS):
        return False

    return not _contains_any_word(stripped, keywords.NON_PRODUCT_TERMS)


def category_from_title(title: str) -> str:
    """Guess a category label from the title when the page gave none.

    Groups are checked in order and the first hit wins.
    """
    for label, terms in keywords.CATEGORY_KEYWORD_GROUPS:
        if _contains_any_word(title, terms):
            return label
    return keywords.DEFAULT_CATEGORY


# --- Derived attributes ---


def derive_brand(title: str) -> str:
    """First word of the title, or "Unknown"."""
    parts = title.split()
    return parts[0] if parts else "Unknown"


def build_listing_url(
    name: str,
    source_url: str | None = None,
    base_url: str = DEFAULT_MARKETPLACE_URL,
) -> str:
    """Return the real listing URL if it points at the marketplace, else a search URL."""
    domain = base_url.split("://", 1)[-1].rstrip("/")
    if source_url and domain in source_url:
        return source_url
    return f"{base_url.rstrip('/')}/s?k={quote_plus(name)}"


def listing_id(name: str, position: int) -> str:
    """Batch-scoped identifier: position keeps it unique, the digest keeps it readable."""
    digest = hashlib.sha1(name.strip().lower().encode("utf-8")).hexdigest()[:8]
    return f"lst-{position:04d}-{digest}"


def classify_flags(
    title: str,
    category: str,
    brand: str,
) -> ListingFlags:
    """Run every flag check for one listing."""
    return ListingFlags(
        is_platform_brand=is_platform_brand(title, brand),
        is_fragile=is_fragile(title, category),
        is_perishable=is_perishable(category),
        is_electronics=is_electronics(title, category),
        has_size_ambiguity=has_size_ambiguity(title),
        is_consumable=is_consumable(title, category),
        is_valid_listing=is_valid_listing(title),
    )


def classify_listing(
    raw: RawListing,
    position: int,
    rng: random.Random,
    today: date,
    scoring_config: ScoringConfig | None = None,
    ranges: FallbackRanges | None = None,
    base_url: str = DEFAULT_MARKETPLACE_URL,
) -> ClassifiedListing | None:
    """Turn one raw listing into a scored ClassifiedListing.

    Args:
        raw: Listing to classify
        position: Index within the batch (used for the identifier)
        rng: Random source for values the page did not provide
        today: Reference date for synthesized expiry dates
        scoring_config: Scoring configuration (uses defaults if None)
        ranges: Fallback ranges (uses defaults if None)
        base_url: Marketplace base URL for synthesized links

    Returns:
        The classified listing, or None if the title is not a real product
    """
    if scoring_config is None:
        scoring_config = ScoringConfig()
    if ranges is None:
        ranges = FallbackRanges()

    title = raw.title.strip()
    if not is_valid_listing(title):
        logger.debug(f"Skipping invalid listing: '{title[:50]}'")
        return None

    numbers = resolve_numbers(raw, rng, ranges)

    category = (raw.category_hint or "").strip() or category_from_title(title)
    brand = (raw.brand or "").strip() or derive_brand(title)
    flags = classify_flags(title, category, brand)

    expiry_date = None
    if flags.is_perishable:
        expiry_date = raw.expiry_date or today + timedelta(
            days=rng.randrange(ranges.expiry_max_days)
        )

    points, breakdown = calculate_points(
        price=numbers.price,
        review_count=numbers.review_count,
        rank=numbers.rank,
        weight_kg=numbers.weight_kg,
        flags=flags,
        config=scoring_config,
    )

    return ClassifiedListing(
        id=listing_id(title, position),
        name=title,
        url=build_listing_url(title, raw.source_url, base_url),
        price=numbers.price,
        review_count=numbers.review_count,
        rank=numbers.rank,
        weight_kg=numbers.weight_kg,
        category=category,
        brand=brand,
        flags=flags,
        expiry_date=expiry_date,
        branding_potential=calculate_branding_potential(
            name=title,
            price=numbers.price,
            review_count=numbers.review_count,
            is_platform_brand=flags.is_platform_brand,
            strategy=scoring_config.branding_strategy,
        ),
        opportunity_score=points,
        opportunity_tier=opportunity_tier(points),
        score_breakdown=breakdown,
    )
