"""Opportunity scoring and branding potential.

Opportunity score factors (defaults from ScoringConfig):
| Factor  | Max Points |
|---------|------------|
| Price   | 30         |
| Reviews | 25         |
| Rank    | 25         |
| Weight  | 20         |

Each axis awards the points of the first (narrowest) tier the value falls in.
Penalties are then deducted per negative flag:
| Flag           | Penalty |
|----------------|---------|
| Platform brand | 25      |
| Fragile        | 15      |
| Perishable     | 15      |
| Electronics    | 10      |
| Size ambiguity | 10      |

The total is clamped to 0-100.
"""

from listing_scout.scoring import keywords
from listing_scout.scoring.models import (
    BrandingPotential,
    BrandingStrategy,
    ClassifiedListing,
    ListingFlags,
    ScoreTier,
    ScoringConfig,
)

MIN_SCORE = 0
MAX_SCORE = 100


def _tier_points(value: float, tiers: list[ScoreTier]) -> int:
    for tier in tiers:
        if tier.contains(value):
            return tier.points
    return 0


def calculate_points(
    price: int,
    review_count: int,
    rank: int,
    weight_kg: float,
    flags: ListingFlags,
    config: ScoringConfig | None = None,
) -> tuple[int, dict[str, int]]:
    """Calculate the opportunity score for a listing.

    Args:
        price: Price in whole currency units
        review_count: Number of reviews
        rank: Bestseller rank
        weight_kg: Weight in kilograms
        flags: Classifier flags
        config: Scoring configuration (uses defaults if None)

    Returns:
        Tuple of (clamped_total, breakdown_dict). Penalties appear in the
        breakdown as negative values.
    """
    if config is None:
        config = ScoringConfig()

    breakdown: dict[str, int] = {
        "price": _tier_points(price, config.price_tiers),
        "reviews": _tier_points(review_count, config.review_tiers),
        "rank": _tier_points(rank, config.rank_tiers),
        "weight": _tier_points(weight_kg, config.weight_tiers),
    }

    active_flags = {
        "platform_brand": flags.is_platform_brand,
        "fragile": flags.is_fragile,
        "perishable": flags.is_perishable,
        "electronics": flags.is_electronics,
        "size_ambiguity": flags.has_size_ambiguity,
    }
    for flag, is_set in active_flags.items():
        if is_set:
            breakdown[f"{flag}_penalty"] = -config.flag_penalties.get(flag, 0)

    total = sum(breakdown.values())
    return max(MIN_SCORE, min(MAX_SCORE, total)), breakdown


def opportunity_tier(points: int) -> str:
    """Label a score: EXCELLENT, GOOD, FAIR or POOR."""
    if points >= 90:
        return "EXCELLENT"
    elif points >= 70:
        return "GOOD"
    elif points >= 50:
        return "FAIR"
    return "POOR"


def competition_branding_potential(
    price: int,
    review_count: int,
    is_platform_brand: bool,
) -> BrandingPotential:
    """Few reviews inside the ideal price band leave room for a new brand."""
    # High: low competition, ideal price band, not a house brand
    if review_count < 200 and 500 <= price <= 2000 and not is_platform_brand:
        return BrandingPotential.HIGH
    # Medium: moderate competition, acceptable price band
    if review_count < 500 and 300 <= price <= 2500:
        return BrandingPotential.MEDIUM
    return BrandingPotential.LOW


def generic_terms_branding_potential(name: str, review_count: int) -> BrandingPotential:
    """Generic accessory names, or too little proven demand, brand poorly."""
    if review_count < 500:
        return BrandingPotential.LOW

    lowered = name.lower()
    if any(term in lowered for term in keywords.GENERIC_PRODUCT_TERMS):
        return BrandingPotential.LOW

    return BrandingPotential.HIGH


def calculate_branding_potential(
    name: str,
    price: int,
    review_count: int,
    is_platform_brand: bool,
    strategy: BrandingStrategy = BrandingStrategy.COMPETITION,
) -> BrandingPotential:
    """Dispatch to the configured branding strategy."""
    if strategy == BrandingStrategy.GENERIC_TERMS:
        return generic_terms_branding_potential(name, review_count)
    return competition_branding_potential(price, review_count, is_platform_brand)


def score_listing(
    listing: ClassifiedListing,
    config: ScoringConfig | None = None,
) -> tuple[int, dict[str, int]]:
    """Recompute the opportunity score of an existing listing under another config."""
    return calculate_points(
        price=listing.price,
        review_count=listing.review_count,
        rank=listing.rank,
        weight_kg=listing.weight_kg,
        flags=listing.flags,
        config=config,
    )
