"""Fixed seed batch used when live bestseller data is unavailable.

Modelled on real marketplace bestsellers. Rank badges are absent, so ranks
are synthesized by the extractor like any other missing field.
"""

from datetime import date

from listing_scout.scoring.keywords import MARKETPLACE_CATEGORIES
from listing_scout.scoring.models import RawListing

SEED_LISTINGS: tuple[RawListing, ...] = (
    RawListing(
        title="Tata Salt 1 Kg, Free Flowing and Iodised Namak, Vacuum Evaporated",
        price_text="₹26",
        review_text="74,059 ratings",
        category_hint="Grocery & Gourmet Foods",
        brand="Tata",
        weight_kg=1.0,
        expiry_date=date(2025, 6, 15),
    ),
    RawListing(
        title="Tata Sampann Unpolished Toor Dal/Arhar Dal, 1kg",
        price_text="₹154",
        review_text="36,412 ratings",
        category_hint="Grocery & Gourmet Foods",
        brand="Tata",
        weight_kg=1.0,
        expiry_date=date(2025, 8, 20),
    ),
    RawListing(
        title="Fortune Sunlite Refined Sunflower Oil, 870gm/800gm Pouch",
        price_text="₹172",
        review_text="41,895 ratings",
        category_hint="Grocery & Gourmet Foods",
        brand="Fortune",
        weight_kg=0.87,
        expiry_date=date(2025, 12, 31),
    ),
    RawListing(
        title="Atom 10Kg Kitchen Weight Machine Digital Scale with LCD Display",
        price_text="₹189",
        review_text="15,630 ratings",
        category_hint="Home & Kitchen",
        brand="Atom",
        weight_kg=0.8,
    ),
    RawListing(
        title="Amazon Brand - Presto! Garbage Bags | Medium | 180 Count",
        price_text="₹335",
        review_text="50,107 ratings",
        category_hint="Home & Kitchen",
        brand="Amazon Brand",
        weight_kg=0.3,
    ),
    RawListing(
        title="JIALTO 10 Pcs Stainless Steel PVC ABS Nail Free Seamless Adhesive Wall Hook",
        price_text="₹149",
        review_text="12,179 ratings",
        category_hint="Home & Kitchen",
        brand="JIALTO",
        weight_kg=0.1,
    ),
    RawListing(
        title="Ghar Soaps Sandalwood & Saffron Magic Soaps For Bath (100 Gms Pack Of 2)",
        price_text="₹284",
        review_text="12,384 ratings",
        category_hint="Beauty & Personal Care",
        brand="Ghar Soaps",
        weight_kg=0.2,
    ),
    RawListing(
        title="WishCare Hair Growth Serum Concentrate - 3% Redensyl, 4% Anagain",
        price_text="₹685",
        review_text="10,155 ratings",
        category_hint="Beauty & Personal Care",
        brand="WishCare",
        weight_kg=0.03,
    ),
    RawListing(
        title="Safari Pentagon Pro 8 Wheels 66Cm Medium Size Checkin Trolley Bag",
        price_text="₹2,599",
        review_text="27,214 ratings",
        category_hint="Bags, Wallets and Luggage",
        brand="Safari",
        weight_kg=2.5,
    ),
    RawListing(
        title="Jockey 1406 Women's High Coverage Super Combed Cotton Mid Waist Hipster",
        price_text="₹449",
        review_text="39,433 ratings",
        category_hint="Clothing & Accessories",
        brand="Jockey",
        weight_kg=0.1,
    ),
    RawListing(
        title="DOCTOR EXTRA SOFT Care Diabetic Orthopedic Pregnancy Flat Super Comfort Dr Flipflops",
        price_text="₹379",
        review_text="51,935 ratings",
        category_hint="Shoes & Handbags",
        brand="DOCTOR",
        weight_kg=0.5,
    ),
    RawListing(
        title="SPARX Men's SFG 14 Flip-Flop",
        price_text="₹329",
        review_text="51,626 ratings",
        category_hint="Shoes & Handbags",
        brand="SPARX",
        weight_kg=0.4,
    ),
    RawListing(
        title="ASIAN Men's Wonder-13 Sports Running Shoes",
        price_text="₹599",
        review_text="104,560 ratings",
        category_hint="Shoes & Handbags",
        brand="ASIAN",
        weight_kg=0.8,
    ),
    RawListing(
        title="OnePlus Nord CE 3 Lite 5G (Pastel Lime, 8GB RAM, 128GB Storage)",
        price_text="₹19,999",
        review_text="1,247 ratings",
        category_hint="Electronics",
        brand="OnePlus",
        weight_kg=0.195,
    ),
    RawListing(
        title="Samsung Galaxy M14 5G (Smoky Teal, 4GB, 128GB Storage)",
        price_text="₹13,490",
        review_text="892 ratings",
        category_hint="Electronics",
        brand="Samsung",
        weight_kg=0.206,
    ),
)


def seed_listings(category: str = "all") -> list[RawListing]:
    """Return the seed batch, narrowed to a marketplace category slug.

    Unknown slugs and "all" return the whole batch.
    """
    label = MARKETPLACE_CATEGORIES.get(category)
    if label is None:
        return list(SEED_LISTINGS)
    return [listing for listing in SEED_LISTINGS if listing.category_hint == label]
