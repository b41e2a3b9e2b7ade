"""Command-line interface for the listing pipeline."""

import argparse
import json
import logging
import random
import sys

from listing_scout.config import get_settings
from listing_scout.scoring.keywords import MARKETPLACE_CATEGORIES
from listing_scout.scoring.models import (
    ClassifiedListing,
    FilterConfiguration,
    PipelineMode,
    RawListing,
)
from listing_scout.services.pipeline import classify_and_score, run_pipeline
from listing_scout.services.seed import seed_listings


def filter_config_from_args(args: argparse.Namespace) -> FilterConfiguration | None:
    """Build a FilterConfiguration from CLI flags, or None if none were given."""
    if args.preset:
        return FilterConfiguration.preset()

    values = {
        "min_price": args.min_price,
        "max_price": args.max_price,
        "min_rank": args.min_rank,
        "max_rank": args.max_rank,
        "max_reviews": args.max_reviews,
        "max_weight": args.max_weight,
    }
    values = {key: value for key, value in values.items() if value is not None}
    for flag in args.exclude or []:
        values[f"exclude_{flag}"] = True

    if not values:
        return None
    return FilterConfiguration(**values)


def print_listing(listing: ClassifiedListing) -> None:
    """Print one listing as a readable block."""
    flags = [
        name
        for name, value in listing.flags.model_dump().items()
        if value and name != "is_valid_listing"
    ]

    print(f"{listing.name}")
    print(f"  Price:       ₹{listing.price:,}")
    print(f"  Reviews:     {listing.review_count:,}")
    print(f"  Rank:        #{listing.rank}")
    print(f"  Weight:      {listing.weight_kg} kg")
    print(f"  Category:    {listing.category}")
    print(f"  Branding:    {listing.branding_potential.value}")
    print(f"  Score:       {listing.opportunity_score}/100 ({listing.opportunity_tier})")
    if flags:
        print(f"  Flags:       {', '.join(flags)}")
    print(f"  URL:         {listing.url}")


def seed_command(args: argparse.Namespace) -> int:
    """Run the pipeline over the seed batch."""
    config = filter_config_from_args(args)
    mode = PipelineMode(args.mode) if args.mode else None
    rng = random.Random(args.seed) if args.seed is not None else None

    result = run_pipeline(
        seed_listings(args.category),
        config,
        mode=mode,
        rng=rng,
        base_url=get_settings().marketplace_base_url,
        source="seed",
    )

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0

    counts = result.counts
    print(f"Mode: {result.mode.value}")
    print(
        f"Received {counts.received}, invalid {counts.invalid}, "
        f"deduped {counts.deduped}, kept {counts.filtered}"
    )
    print(f"{'=' * 50}")
    for listing in result.results:
        print_listing(listing)
        print()

    return 0


def classify_command(args: argparse.Namespace) -> int:
    """Classify and score a single raw listing given as JSON."""
    raw = RawListing.model_validate(json.loads(args.json))
    rng = random.Random(args.seed) if args.seed is not None else None

    listings = classify_and_score(
        [raw],
        rng=rng,
        base_url=get_settings().marketplace_base_url,
    )
    if not listings:
        print("Not a valid product listing")
        return 1

    listing = listings[0]
    print_listing(listing)
    print("\n  Breakdown:")
    for factor, points in listing.score_breakdown.items():
        print(f"    {factor:22}: {points}")
    return 0


def main() -> int:
    """Main CLI entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        prog="listing-scout",
        description="Marketplace listing classification and filtering",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Seed command
    seed_parser = subparsers.add_parser("seed", help="Run the pipeline over the seed batch")
    seed_parser.add_argument(
        "--category",
        default="all",
        choices=["all", *MARKETPLACE_CATEGORIES],
        help="Category slug (default: all)",
    )
    seed_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in PipelineMode],
        help="Filter mode (default: core_user with filters, else core)",
    )
    seed_parser.add_argument("--seed", type=int, help="Random seed for missing values")
    seed_parser.add_argument("--min-price", type=int)
    seed_parser.add_argument("--max-price", type=int)
    seed_parser.add_argument("--min-rank", type=int)
    seed_parser.add_argument("--max-rank", type=int)
    seed_parser.add_argument("--max-reviews", type=int)
    seed_parser.add_argument("--max-weight", type=float)
    seed_parser.add_argument(
        "--exclude",
        action="append",
        choices=[
            "platform_brand",
            "fragile",
            "perishable",
            "electronics",
            "size_ambiguity",
            "consumable",
        ],
        help="Exclude listings with this flag (repeatable)",
    )
    seed_parser.add_argument(
        "--preset",
        action="store_true",
        help="Use the default analysis criteria",
    )
    seed_parser.add_argument("--json", action="store_true", help="Print JSON")

    # Classify command
    classify_parser = subparsers.add_parser("classify", help="Classify one raw listing")
    classify_parser.add_argument(
        "--json",
        required=True,
        type=str,
        help='Raw listing as JSON, e.g. \'{"title": "...", "price_text": "₹999"}\'',
    )
    classify_parser.add_argument("--seed", type=int, help="Random seed for missing values")

    # Categories command
    subparsers.add_parser("categories", help="List marketplace category slugs")

    args = parser.parse_args()

    if args.command == "seed":
        return seed_command(args)
    elif args.command == "classify":
        return classify_command(args)
    elif args.command == "categories":
        for slug, label in MARKETPLACE_CATEGORIES.items():
            print(f"{slug:24} {label}")
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
