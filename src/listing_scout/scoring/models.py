"""Data models for listing classification, scoring and filtering."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BrandingPotential(str, Enum):
    """How easy it would be to build a distinct brand around a listing."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class BrandingStrategy(str, Enum):
    """Named rules for deriving branding potential.

    - competition: low review count inside the ideal price band means High
    - generic_terms: accessory-sounding names or few reviews mean Low
    """

    COMPETITION = "competition"
    GENERIC_TERMS = "generic_terms"


class PipelineMode(str, Enum):
    """Which filter layers the pipeline applies."""

    RAW = "raw"
    CORE = "core"
    CORE_USER = "core_user"
    COMPREHENSIVE = "comprehensive"


class RawListing(BaseModel):
    """A single scraped or seeded marketplace element, before extraction."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Listing title as shown on the page")
    price_text: Optional[str] = Field(None, description="Free-form price text, e.g. '₹1,299.00'")
    review_text: Optional[str] = Field(None, description="Free-form review text, e.g. '1,234 ratings'")
    rank_badge_text: Optional[str] = Field(None, description="Bestseller badge text, e.g. '#12'")
    category_hint: Optional[str] = Field(None, description="Category label from the page section")
    source_url: Optional[str] = Field(None, description="Listing URL if one was found")

    # Optional structured values (seed data, detail pages)
    brand: Optional[str] = Field(None, description="Brand name if known")
    weight_kg: Optional[float] = Field(None, gt=0, description="Shipping weight in kilograms")
    expiry_date: Optional[date] = Field(None, description="Best-before date for perishables")


class ListingFlags(BaseModel):
    """Heuristic business flags derived from title and category text."""

    model_config = ConfigDict(frozen=True)

    is_platform_brand: bool = False
    is_fragile: bool = False
    is_perishable: bool = False
    is_electronics: bool = False
    has_size_ambiguity: bool = False
    is_consumable: bool = False
    is_valid_listing: bool = True


class ClassifiedListing(BaseModel):
    """Canonical scored listing. Built once by the classifier, never mutated."""

    model_config = ConfigDict(frozen=True)

    # Identification
    id: str = Field(..., description="Identifier unique within the batch")
    name: str = Field(..., min_length=1, description="Listing title")
    url: str = Field(..., description="Marketplace detail or search URL")

    # Market data
    price: int = Field(..., ge=0, description="Price in whole currency units")
    review_count: int = Field(..., ge=0, description="Number of reviews/ratings")
    rank: int = Field(..., ge=1, description="Bestseller rank (lower is more prominent)")
    weight_kg: float = Field(..., gt=0, description="Shipping weight in kilograms")

    # Attributes
    category: str
    brand: str
    flags: ListingFlags
    expiry_date: Optional[date] = None

    # Derived
    branding_potential: BrandingPotential
    opportunity_score: int = Field(..., ge=0, le=100)
    opportunity_tier: str
    score_breakdown: dict[str, int] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _expiry_only_for_perishables(self) -> "ClassifiedListing":
        if self.flags.is_perishable and self.expiry_date is None:
            raise ValueError("perishable listings must carry an expiry_date")
        if not self.flags.is_perishable and self.expiry_date is not None:
            raise ValueError("expiry_date is only allowed on perishable listings")
        return self


class FilterConfiguration(BaseModel):
    """Caller-adjustable filter layer. Absent bounds do not constrain."""

    model_config = ConfigDict(frozen=True)

    # Range bounds
    min_price: Optional[int] = Field(None, ge=0, description="Minimum price (inclusive)")
    max_price: Optional[int] = Field(None, ge=0, description="Maximum price (inclusive)")
    min_rank: Optional[int] = Field(None, ge=0, description="Minimum rank (inclusive)")
    max_rank: Optional[int] = Field(None, ge=0, description="Maximum rank (inclusive)")
    max_reviews: Optional[int] = Field(None, ge=0, description="Maximum reviews (inclusive)")
    max_weight: Optional[float] = Field(None, ge=0, description="Maximum weight in kg (inclusive)")

    # Exclusion toggles
    exclude_platform_brand: bool = False
    exclude_fragile: bool = False
    exclude_perishable: bool = False
    exclude_electronics: bool = False
    exclude_size_ambiguity: bool = False
    exclude_consumable: bool = False

    # Attribute matches
    category: Optional[str] = Field(None, description="Exact category label; 'All' means any")
    branding_potential: Optional[BrandingPotential] = None

    @model_validator(mode="after")
    def _reject_inverted_ranges(self) -> "FilterConfiguration":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError(f"min_price {self.min_price} > max_price {self.max_price}")
        if (
            self.min_rank is not None
            and self.max_rank is not None
            and self.min_rank > self.max_rank
        ):
            raise ValueError(f"min_rank {self.min_rank} > max_rank {self.max_rank}")
        return self

    @classmethod
    def preset(cls) -> "FilterConfiguration":
        """Default analysis criteria offered to users."""
        return cls(
            min_price=300,
            max_price=2500,
            max_reviews=1000,
            min_rank=1,
            max_rank=50,
            max_weight=2.0,
            exclude_platform_brand=True,
            exclude_fragile=True,
            exclude_perishable=True,
            exclude_electronics=True,
            exclude_size_ambiguity=True,
        )


class FallbackRanges(BaseModel):
    """Inclusive ranges used to synthesize values the page did not provide."""

    price_min: int = Field(500, ge=1)
    price_max: int = Field(2499, ge=1)
    reviews_min: int = Field(10, ge=0)
    reviews_max: int = Field(1009, ge=0)
    rank_min: int = Field(100, ge=1)
    rank_max: int = Field(5099, ge=1)
    weight_min: float = Field(0.1, gt=0)
    weight_max: float = Field(0.9, gt=0)
    expiry_max_days: int = Field(365, ge=1)

    @model_validator(mode="after")
    def _reject_inverted_ranges(self) -> "FallbackRanges":
        for axis in ("price", "reviews", "rank", "weight"):
            low = getattr(self, f"{axis}_min")
            high = getattr(self, f"{axis}_max")
            if low > high:
                raise ValueError(f"{axis}_min {low} > {axis}_max {high}")
        return self


class CoreFilterCriteria(BaseModel):
    """Fixed sourcing baseline. Not exposed to API callers."""

    min_price: int = Field(500, description="Reject if price < this")
    max_price: int = Field(2000, description="Reject if price > this")
    max_reviews_exclusive: int = Field(300, description="Reject if reviews >= this")
    min_rank: int = Field(200, description="Reject if rank < this")
    max_rank: int = Field(2000, description="Reject if rank > this")
    max_weight_exclusive: float = Field(1.0, description="Reject if weight >= this kg")
    expiry_horizon_months: int = Field(6, description="Reject perishables expiring sooner")


class ScoreTier(BaseModel):
    """One band of a scoring axis. Bounds are inclusive."""

    low: float
    high: float
    points: int = Field(..., ge=0)

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


class ScoringConfig(BaseModel):
    """Point tables and penalties for the opportunity score.

    Tiers are checked in order and the first match wins, so each axis lists
    its narrowest band first.
    """

    price_tiers: list[ScoreTier] = Field(
        default_factory=lambda: [
            ScoreTier(low=800, high=1500, points=30),
            ScoreTier(low=500, high=2000, points=22),
            ScoreTier(low=300, high=2500, points=12),
        ]
    )
    review_tiers: list[ScoreTier] = Field(
        default_factory=lambda: [
            ScoreTier(low=0, high=49, points=25),
            ScoreTier(low=0, high=199, points=18),
            ScoreTier(low=0, high=299, points=12),
            ScoreTier(low=0, high=499, points=6),
        ]
    )
    rank_tiers: list[ScoreTier] = Field(
        default_factory=lambda: [
            ScoreTier(low=200, high=500, points=25),
            ScoreTier(low=200, high=2000, points=18),
            ScoreTier(low=100, high=5000, points=8),
        ]
    )
    weight_tiers: list[ScoreTier] = Field(
        default_factory=lambda: [
            ScoreTier(low=0, high=0.25, points=20),
            ScoreTier(low=0, high=0.5, points=15),
            ScoreTier(low=0, high=1.0, points=10),
            ScoreTier(low=0, high=2.0, points=5),
        ]
    )
    flag_penalties: dict[str, int] = Field(
        default_factory=lambda: {
            "platform_brand": 25,
            "fragile": 15,
            "perishable": 15,
            "electronics": 10,
            "size_ambiguity": 10,
        }
    )
    branding_strategy: BrandingStrategy = BrandingStrategy.COMPETITION


class PipelineCounts(BaseModel):
    """Per-stage counts for one pipeline run."""

    received: int = 0
    invalid: int = 0
    total: int = 0
    deduped: int = 0
    filtered: int = 0


class PipelineResult(BaseModel):
    """Filtered, scored batch plus counts."""

    results: list[ClassifiedListing] = Field(default_factory=list)
    counts: PipelineCounts = Field(default_factory=PipelineCounts)
    mode: PipelineMode = PipelineMode.CORE
    source: str = Field("batch", description="live, seed or batch")
