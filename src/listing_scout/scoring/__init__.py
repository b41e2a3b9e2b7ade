"""Listing classification and scoring module."""

from listing_scout.scoring.classifier import (
    category_from_title,
    classify_listing,
    has_size_ambiguity,
    is_consumable,
    is_electronics,
    is_fragile,
    is_perishable,
    is_platform_brand,
    is_valid_listing,
)
from listing_scout.scoring.extractor import (
    parse_price,
    parse_rank,
    parse_review_count,
    resolve_numbers,
)
from listing_scout.scoring.filters import (
    FilterResult,
    apply_core_filter,
    apply_user_filter,
    evaluate_core_filter,
)
from listing_scout.scoring.models import (
    BrandingPotential,
    BrandingStrategy,
    ClassifiedListing,
    CoreFilterCriteria,
    FallbackRanges,
    FilterConfiguration,
    ListingFlags,
    PipelineMode,
    RawListing,
    ScoreTier,
    ScoringConfig,
)
from listing_scout.scoring.scorer import (
    calculate_branding_potential,
    calculate_points,
    opportunity_tier,
    score_listing,
)

__all__ = [
    # Models
    "BrandingPotential",
    "BrandingStrategy",
    "ClassifiedListing",
    "CoreFilterCriteria",
    "FallbackRanges",
    "FilterConfiguration",
    "ListingFlags",
    "PipelineMode",
    "RawListing",
    "ScoreTier",
    "ScoringConfig",
    # Extractor
    "parse_price",
    "parse_rank",
    "parse_review_count",
    "resolve_numbers",
    # Classifier
    "category_from_title",
    "classify_listing",
    "has_size_ambiguity",
    "is_consumable",
    "is_electronics",
    "is_fragile",
    "is_perishable",
    "is_platform_brand",
    "is_valid_listing",
    # Filters
    "FilterResult",
    "apply_core_filter",
    "apply_user_filter",
    "evaluate_core_filter",
    # Scorer
    "calculate_branding_potential",
    "calculate_points",
    "opportunity_tier",
    "score_listing",
]
