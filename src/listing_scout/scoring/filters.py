"""Core and user filters for classified listings.

The core filter is the fixed sourcing baseline: a listing that fails any
check is never sourceable. The user filter is the caller-adjustable layer;
each configured bound or toggle becomes one independent predicate.
"""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from listing_scout.scoring.models import (
    ClassifiedListing,
    CoreFilterCriteria,
    FilterConfiguration,
)

logger = logging.getLogger(__name__)

ListingPredicate = Callable[[ClassifiedListing], bool]


@dataclass
class FilterResult:
    """Result of applying the core filter to a listing."""

    passed: bool
    reasons: list[str] = field(default_factory=list)

    def add_rejection(self, reason: str) -> None:
        """Add a rejection reason."""
        self.passed = False
        self.reasons.append(reason)


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the last day of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def evaluate_core_filter(
    listing: ClassifiedListing,
    criteria: CoreFilterCriteria | None = None,
    today: date | None = None,
) -> FilterResult:
    """Apply every core check to a listing.

    Core checks:
    - Platform (house) brand
    - Fragile
    - Perishable expiring within the horizon (default 6 months)
    - Confusing size variations
    - Price outside 500-2000
    - Reviews >= 300
    - Rank outside 200-2000
    - Weight >= 1 kg

    Args:
        listing: Listing to evaluate
        criteria: Core criteria (uses defaults if None)
        today: Reference date for the expiry horizon (uses date.today() if None)

    Returns:
        FilterResult with pass/fail and rejection reasons
    """
    if criteria is None:
        criteria = CoreFilterCriteria()
    if today is None:
        today = date.today()

    result = FilterResult(passed=True)
    flags = listing.flags

    # --- Attribute Filters ---

    if flags.is_platform_brand:
        result.add_rejection("Platform-owned brand")

    if flags.is_fragile:
        result.add_rejection("Fragile item (damage risk)")

    if flags.is_perishable and listing.expiry_date is not None:
        horizon = add_months(today, criteria.expiry_horizon_months)
        if listing.expiry_date < horizon:
            result.add_rejection(
                f"Expires {listing.expiry_date.isoformat()} before {horizon.isoformat()}"
            )

    if flags.has_size_ambiguity:
        result.add_rejection("Confusing size variations")

    # --- Market Filters ---

    if listing.price < criteria.min_price:
        result.add_rejection(f"Price {listing.price} < minimum {criteria.min_price}")

    if listing.price > criteria.max_price:
        result.add_rejection(f"Price {listing.price} > maximum {criteria.max_price}")

    if listing.review_count >= criteria.max_reviews_exclusive:
        result.add_rejection(
            f"Reviews {listing.review_count} >= limit {criteria.max_reviews_exclusive}"
        )

    if listing.rank < criteria.min_rank:
        result.add_rejection(f"Rank {listing.rank} < minimum {criteria.min_rank}")

    if listing.rank > criteria.max_rank:
        result.add_rejection(f"Rank {listing.rank} > maximum {criteria.max_rank}")

    # --- Shipping Filters ---

    if listing.weight_kg >= criteria.max_weight_exclusive:
        result.add_rejection(
            f"Weight {listing.weight_kg}kg >= limit {criteria.max_weight_exclusive}kg"
        )

    return result


def apply_core_filter(
    listings: list[ClassifiedListing],
    criteria: CoreFilterCriteria | None = None,
    today: date | None = None,
) -> list[ClassifiedListing]:
    """Return the listings that pass every core check, in input order."""
    if today is None:
        today = date.today()

    kept = [
        listing
        for listing in listings
        if evaluate_core_filter(listing, criteria, today).passed
    ]
    logger.info(f"Core filter kept {len(kept)} of {len(listings)} listings")
    return kept


def user_filter_predicates(config: FilterConfiguration) -> list[ListingPredicate]:
    """Build one predicate per configured bound or toggle.

    Unset bounds and disabled toggles contribute nothing.
    """
    predicates: list[ListingPredicate] = []

    # --- Range bounds ---
    if config.min_price is not None:
        predicates.append(lambda item: item.price >= config.min_price)
    if config.max_price is not None:
        predicates.append(lambda item: item.price <= config.max_price)
    if config.min_rank is not None:
        predicates.append(lambda item: item.rank >= config.min_rank)
    if config.max_rank is not None:
        predicates.append(lambda item: item.rank <= config.max_rank)
    if config.max_reviews is not None:
        predicates.append(lambda item: item.review_count <= config.max_reviews)
    if config.max_weight is not None:
        predicates.append(lambda item: item.weight_kg <= config.max_weight)

    # --- Exclusion toggles ---
    if config.exclude_platform_brand:
        predicates.append(lambda item: not item.flags.is_platform_brand)
    if config.exclude_fragile:
        predicates.append(lambda item: not item.flags.is_fragile)
    if config.exclude_perishable:
        predicates.append(lambda item: not item.flags.is_perishable)
    if config.exclude_electronics:
        predicates.append(lambda item: not item.flags.is_electronics)
    if config.exclude_size_ambiguity:
        predicates.append(lambda item: not item.flags.has_size_ambiguity)
    if config.exclude_consumable:
        predicates.append(lambda item: not item.flags.is_consumable)

    # --- Attribute matches ---
    if config.category and config.category != "All":
        predicates.append(lambda item: item.category == config.category)
    if config.branding_potential is not None:
        predicates.append(lambda item: item.branding_potential == config.branding_potential)

    return predicates


def apply_user_filter(
    listings: list[ClassifiedListing],
    config: FilterConfiguration,
) -> list[ClassifiedListing]:
    """Return the listings that satisfy every configured user predicate."""
    predicates = user_filter_predicates(config)
    kept = [
        listing
        for listing in listings
        if all(predicate(listing) for predicate in predicates)
    ]
    logger.info(
        f"User filter ({len(predicates)} active rules) kept {len(kept)} of {len(listings)} listings"
    )
    return kept
