"""Numeric extraction from free-form listing text.

Marketplace markup is inconsistent, so every parser degrades to 0 instead of
failing. ``resolve_numbers`` then replaces each 0 with a plausible value drawn
from ``FallbackRanges`` using a caller-supplied ``random.Random``.
"""

import logging
import random
import re
from dataclasses import dataclass

from listing_scout.scoring.models import FallbackRanges, RawListing

logger = logging.getLogger(__name__)


_CURRENCY = r"(?:₹|\$|Rs\.?)"

# Most specific first
PRICE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(_CURRENCY + r"\d[\d,]*\.\d{2}"),  # ₹1,299.00
    re.compile(_CURRENCY + r"\d[\d,]*"),  # ₹1,299
    re.compile(r"\d[\d,]*(?:\.\d{2})?"),  # 1,299.00 or 1,299
    re.compile(_CURRENCY + r"\s+\d[\d,]*"),  # ₹ 1,299
)

REVIEW_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+(?:,\d+)*)\s*(?:reviews?|ratings?)", re.IGNORECASE),  # 1,234 ratings
    re.compile(r"(\d+(?:\.\d+)?)\s*([KM])\b", re.IGNORECASE),  # 12.5K
    re.compile(r"(\d+(?:,\d+)*)"),  # bare number
)

# "4.3 out of 5 stars" is a rating, not a count
STAR_RATING_PATTERN = re.compile(
    r"\d+(?:\.\d+)?\s*out\s+of\s+5(?:\s*stars?)?", re.IGNORECASE
)

RANK_PATTERN = re.compile(r"^\s*#?\s*(\d[\d,]*)")

_MULTIPLIERS = {"K": 1_000, "M": 1_000_000}


@dataclass(frozen=True)
class ExtractedNumbers:
    """Numeric fields for one listing, fallbacks already applied."""

    price: int
    review_count: int
    rank: int
    weight_kg: float
    synthesized: tuple[str, ...] = ()


def _to_int(digits: str) -> int:
    """Strip currency, separators and fraction; return the integer part."""
    cleaned = re.sub(_CURRENCY, "", digits)
    cleaned = cleaned.replace(",", "")
    cleaned = re.sub(r"\s+", "", cleaned)
    whole = cleaned.split(".", 1)[0]
    try:
        return int(whole)
    except ValueError:
        return 0


def parse_price(price_text: str | None) -> int:
    """Parse a price string to whole currency units.

    Handles formats like:
    - "₹1,299.00"
    - "₹1,299"
    - "1,299"
    - "₹ 1,299"

    Returns:
        The first strictly positive match, or 0 when nothing parses.
    """
    if not price_text:
        return 0

    for pattern in PRICE_PATTERNS:
        match = pattern.search(price_text)
        if match:
            price = _to_int(match.group(0))
            if price > 0:
                return price

    return 0


def parse_review_count(review_text: str | None) -> int:
    """Parse a review count string.

    Explicit "N reviews" / "N ratings" phrasing is preferred over a bare
    number. "12K" and "1.2M" suffixes are expanded. Star ratings are
    ignored, so text holding only a rating returns 0.
    """
    if not review_text:
        return 0

    review_text = STAR_RATING_PATTERN.sub(" ", review_text)

    for pattern in REVIEW_PATTERNS:
        match = pattern.search(review_text)
        if not match:
            continue

        if pattern.groups == 2:
            try:
                count = int(float(match.group(1)) * _MULTIPLIERS[match.group(2).upper()])
            except ValueError:
                count = 0
        else:
            count = _to_int(match.group(1))

        if count > 0:
            return count

    return 0


def parse_rank(rank_text: str | None) -> int:
    """Parse a bestseller badge like "#12" to 12. Returns 0 when absent."""
    if not rank_text:
        return 0

    match = RANK_PATTERN.match(rank_text)
    if not match:
        return 0
    return _to_int(match.group(1))


def resolve_numbers(
    raw: RawListing,
    rng: random.Random,
    ranges: FallbackRanges | None = None,
) -> ExtractedNumbers:
    """Extract price, reviews, rank and weight, synthesizing what is missing.

    Random values are drawn only for missing fields, always in the order
    price, reviews, rank, weight, so a seeded ``rng`` gives repeatable output.

    Args:
        raw: Listing to extract from
        rng: Random source for fallback values
        ranges: Fallback ranges (uses defaults if None)

    Returns:
        ExtractedNumbers with every field populated
    """
    if ranges is None:
        ranges = FallbackRanges()

    synthesized: list[str] = []

    price = parse_price(raw.price_text)
    if price <= 0:
        price = rng.randint(ranges.price_min, ranges.price_max)
        synthesized.append("price")

    review_count = parse_review_count(raw.review_text)
    if review_count <= 0:
        review_count = rng.randint(ranges.reviews_min, ranges.reviews_max)
        synthesized.append("review_count")

    rank = parse_rank(raw.rank_badge_text)
    if rank <= 0:
        rank = rng.randint(ranges.rank_min, ranges.rank_max)
        synthesized.append("rank")

    if raw.weight_kg is not None:
        weight_kg = raw.weight_kg
    else:
        weight_kg = round(rng.uniform(ranges.weight_min, ranges.weight_max), 2)
        synthesized.append("weight_kg")

    if synthesized:
        logger.debug(f"Synthesized {', '.join(synthesized)} for '{raw.title[:50]}'")

    return ExtractedNumbers(
        price=price,
        review_count=review_count,
        rank=rank,
        weight_kg=weight_kg,
        synthesized=tuple(synthesized),
    )
