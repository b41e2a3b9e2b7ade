"""Listing Pipeline Service - orchestrates extraction, classification, scoring and filtering.

Takes a raw listing batch, classifies and scores every listing, removes
duplicates and applies the filter layers selected by the pipeline mode.

Usage:
    result = run_pipeline(raw_batch, FilterConfiguration(max_price=1500))
    print(f"{result.counts.filtered} of {result.counts.total} listings kept")

    service = PipelineService(BestsellerFetcher())
    result = await service.run(category="home-kitchen", mode=PipelineMode.CORE)
"""

import logging
import random
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from listing_scout.scoring.classifier import DEFAULT_MARKETPLACE_URL, classify_listing
from listing_scout.scoring.filters import apply_core_filter, apply_user_filter
from listing_scout.scoring.keywords import MARKETPLACE_CATEGORIES
from listing_scout.scoring.models import (
    ClassifiedListing,
    CoreFilterCriteria,
    FallbackRanges,
    FilterConfiguration,
    PipelineCounts,
    PipelineMode,
    PipelineResult,
    RawListing,
    ScoringConfig,
)
from listing_scout.services.bestsellers import BestsellerFetcher, BestsellerFetchError
from listing_scout.services.seed import seed_listings

logger = logging.getLogger(__name__)


class InvalidBatchError(ValueError):
    """Exception raised for structurally invalid input batches."""

    pass


def _coerce_batch(batch: Any) -> list[RawListing]:
    """Validate the batch shape, turning mappings into RawListing."""
    if isinstance(batch, (str, bytes)) or not isinstance(batch, Sequence):
        raise InvalidBatchError(
            f"Expected a list of listings, got {type(batch).__name__}"
        )

    records: list[RawListing] = []
    for index, record in enumerate(batch):
        if isinstance(record, RawListing):
            records.append(record)
        elif isinstance(record, Mapping):
            try:
                records.append(RawListing.model_validate(record))
            except ValidationError as e:
                raise InvalidBatchError(f"Record {index} is malformed: {e}") from e
        else:
            raise InvalidBatchError(
                f"Record {index} is a {type(record).__name__}, not a listing"
            )
    return records


def normalize_name(name: str) -> str:
    """Dedup key: casefolded, trimmed, whitespace collapsed."""
    return " ".join(name.casefold().split())


def deduplicate(
    listings: list[ClassifiedListing],
) -> tuple[list[ClassifiedListing], int]:
    """Remove listings whose normalized name was already seen, keeping the first.

    Returns the deduplicated list and the count of removed duplicates.
    """
    seen: set[str] = set()
    kept: list[ClassifiedListing] = []
    removed = 0

    for listing in listings:
        key = normalize_name(listing.name)
        if key in seen:
            removed += 1
            continue
        seen.add(key)
        kept.append(listing)

    if removed:
        logger.info(f"Deduplication removed {removed} duplicate listings")

    return kept, removed


def _classify(
    records: list[RawListing],
    rng: random.Random,
    today: date,
    scoring_config: ScoringConfig | None,
    ranges: FallbackRanges | None,
    base_url: str,
) -> tuple[list[ClassifiedListing], int]:
    classified: list[ClassifiedListing] = []
    invalid = 0
    for position, raw in enumerate(records):
        listing = classify_listing(
            raw,
            position=position,
            rng=rng,
            today=today,
            scoring_config=scoring_config,
            ranges=ranges,
            base_url=base_url,
        )
        if listing is None:
            invalid += 1
        else:
            classified.append(listing)

    if invalid:
        logger.info(f"Dropped {invalid} invalid listings")

    return classified, invalid


def classify_and_score(
    batch: Sequence[RawListing | Mapping[str, Any]],
    *,
    rng: random.Random | None = None,
    today: date | None = None,
    scoring_config: ScoringConfig | None = None,
    ranges: FallbackRanges | None = None,
    base_url: str = DEFAULT_MARKETPLACE_URL,
) -> list[ClassifiedListing]:
    """Classify and score a raw batch without filtering.

    Invalid listings (too short, promotional) are dropped.

    Args:
        batch: Raw listings, or mappings that validate as RawListing.
        rng: Random source for missing values (fresh unseeded Random if None).
        today: Reference date for synthesized expiry dates.
        scoring_config: Scoring configuration.
        ranges: Fallback ranges for missing values.
        base_url: Marketplace base URL for synthesized links.

    Returns:
        ClassifiedListing per valid input, in input order.

    Raises:
        InvalidBatchError: If the batch or a record is structurally invalid.
    """
    records = _coerce_batch(batch)
    classified, _ = _classify(
        records,
        rng=rng or random.Random(),
        today=today or date.today(),
        scoring_config=scoring_config,
        ranges=ranges,
        base_url=base_url,
    )
    return classified


def resolve_mode(
    mode: PipelineMode | None,
    config: FilterConfiguration | None,
) -> PipelineMode:
    """Default to core+user when a config is given, else core only."""
    if mode is not None:
        return mode
    return PipelineMode.CORE_USER if config is not None else PipelineMode.CORE


def run_pipeline(
    raw_batch: Sequence[RawListing | Mapping[str, Any]],
    config: FilterConfiguration | None = None,
    *,
    mode: PipelineMode | None = None,
    rng: random.Random | None = None,
    today: date | None = None,
    scoring_config: ScoringConfig | None = None,
    ranges: FallbackRanges | None = None,
    core_criteria: CoreFilterCriteria | None = None,
    base_url: str = DEFAULT_MARKETPLACE_URL,
    source: str = "batch",
) -> PipelineResult:
    """Run the full pipeline: extract → classify → score → dedup → filter.

    Modes:
    - raw: no filtering
    - core: core filter only
    - core_user: core filter, then user filter
    - comprehensive: user filter only (multi-category batches)

    Args:
        raw_batch: Raw listings to process.
        config: User filter configuration (optional).
        mode: Filter mode (see resolve_mode for the default).
        rng: Random source for missing values.
        today: Reference date for expiry checks.
        scoring_config: Scoring configuration.
        ranges: Fallback ranges.
        core_criteria: Core filter criteria.
        base_url: Marketplace base URL for synthesized links.
        source: Label for where the batch came from.

    Returns:
        PipelineResult with listings and counts.

    Raises:
        InvalidBatchError: If the batch or a record is structurally invalid.
    """
    mode = resolve_mode(mode, config)
    today = today or date.today()
    records = _coerce_batch(raw_batch)
    counts = PipelineCounts(received=len(records))

    classified, counts.invalid = _classify(
        records,
        rng=rng or random.Random(),
        today=today,
        scoring_config=scoring_config,
        ranges=ranges,
        base_url=base_url,
    )
    counts.total = len(classified)

    listings, _ = deduplicate(classified)
    counts.deduped = len(listings)

    if mode in (PipelineMode.CORE, PipelineMode.CORE_USER):
        listings = apply_core_filter(listings, core_criteria, today)

    if mode in (PipelineMode.CORE_USER, PipelineMode.COMPREHENSIVE):
        listings = apply_user_filter(listings, config or FilterConfiguration())

    counts.filtered = len(listings)

    logger.info(
        f"Pipeline ({mode.value}, {source}): received={counts.received} "
        f"invalid={counts.invalid} total={counts.total} "
        f"deduped={counts.deduped} filtered={counts.filtered}"
    )

    return PipelineResult(results=listings, counts=counts, mode=mode, source=source)


class PipelineService:
    """Service for running the pipeline against live bestseller data.

    Orchestrates:
    1. Fetching (bestseller pages, falling back to the seed batch)
    2. Classification and scoring
    3. Dedup and filtering

    Usage:
        service = PipelineService(BestsellerFetcher())
        result = await service.run(category="all", config=FilterConfiguration.preset())
    """

    def __init__(
        self,
        fetcher: BestsellerFetcher,
        base_url: str = DEFAULT_MARKETPLACE_URL,
        rng: Optional[random.Random] = None,
    ):
        """Initialize pipeline service.

        Args:
            fetcher: Bestseller page fetcher.
            base_url: Marketplace base URL for synthesized links.
            rng: Random source shared by runs (fresh per run if None).
        """
        self.fetcher = fetcher
        self.base_url = base_url
        self.rng = rng

    async def _fetch_or_seed(self, category: str) -> tuple[list[RawListing], str]:
        try:
            return await self.fetcher.fetch_category(category), "live"
        except BestsellerFetchError as e:
            logger.warning(f"Live fetch failed for '{category}', using seed batch: {e}")
            return seed_listings(category), "seed"

    async def run(
        self,
        category: str = "all",
        config: FilterConfiguration | None = None,
        mode: PipelineMode | None = None,
        today: date | None = None,
    ) -> PipelineResult:
        """Fetch one category and run the pipeline over it.

        Args:
            category: Marketplace category slug ("all" for the landing page).
            config: User filter configuration.
            mode: Filter mode.
            today: Reference date for expiry checks.

        Returns:
            PipelineResult; source is "live" or "seed".
        """
        raw_batch, source = await self._fetch_or_seed(category)
        return run_pipeline(
            raw_batch,
            config,
            mode=mode,
            rng=self.rng,
            today=today,
            base_url=self.base_url,
            source=source,
        )

    async def run_comprehensive(
        self,
        config: FilterConfiguration | None = None,
        categories: list[str] | None = None,
        today: date | None = None,
    ) -> PipelineResult:
        """Fetch every category and apply the user filter to the combined batch.

        Args:
            config: User filter configuration.
            categories: Category slugs (all marketplace categories if None).
            today: Reference date for expiry checks.

        Returns:
            PipelineResult in comprehensive mode.
        """
        if categories is None:
            categories = list(MARKETPLACE_CATEGORIES)

        try:
            pages = await self.fetcher.fetch_categories(categories)
            raw_batch = [listing for listings in pages.values() for listing in listings]
            source = "live"
        except BestsellerFetchError as e:
            logger.warning(f"Comprehensive fetch failed, using seed batch: {e}")
            raw_batch = seed_listings("all")
            source = "seed"

        return run_pipeline(
            raw_batch,
            config,
            mode=PipelineMode.COMPREHENSIVE,
            rng=self.rng,
            today=today,
            base_url=self.base_url,
            source=source,
        )
