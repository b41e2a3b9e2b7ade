"""Keyword tables for listing classification.

Every classifier in ``listing_scout.scoring.classifier`` reads its terms from
here. All terms are lowercase.
"""

# Marketplace house brands
PLATFORM_BRAND_TERMS: tuple[str, ...] = (
    "amazon basics",
    "amazon brand",
    "presto",
    "symbol",
    "solimo",
)

FRAGILE_TERMS: tuple[str, ...] = (
    "glass",
    "ceramic",
    "crystal",
    "mirror",
    "vase",
)

# Matched against the category label only
PERISHABLE_CATEGORY_TERMS: tuple[str, ...] = (
    "grocery",
    "food",
    "beverage",
    "snacks",
)

SIZE_AMBIGUITY_TERMS: tuple[str, ...] = (
    "size",
    "small",
    "medium",
    "large",
    "xl",
    "xxl",
    "xxxl",
    "inch",
    "cm",
    "cargo",
    "polo",
    "t-shirt",
    "shirt",
    "pants",
    "shorts",
    "jeans",
    "available in",
    "combo",
    "pack",
    "variations",
    "sizes",
    "fit",
    "regular fit",
    "slim fit",
    "loose fit",
    "tight fit",
)

ELECTRONICS_TERMS: tuple[str, ...] = (
    "phone",
    "mobile",
    "laptop",
    "computer",
    "tablet",
    "headphone",
    "speaker",
    "camera",
    "tv",
    "monitor",
    "keyboard",
    "mouse",
    "charger",
    "cable",
    "usb",
    "bluetooth",
    "wifi",
    "led",
    "battery",
    "power bank",
    "extension board",
    "multi plug",
    "adapter",
    "juicer",
    "mixer",
    "grinder",
    "blender",
    "appliance",
    "electronic",
    "digital",
    "smart",
    "wireless",
    "electric",
    "power",
    "volt",
    "amp",
    "watt",
    "socket",
    "plug",
    "cord",
)

# Consumption/living goods (whole-word matches)
CONSUMABLE_TERMS: tuple[str, ...] = (
    "soap",
    "shampoo",
    "conditioner",
    "serum",
    "cream",
    "lotion",
    "detergent",
    "toothpaste",
    "deodorant",
    "perfume",
    "supplement",
    "vitamin",
    "pet food",
    "plant",
    "seeds",
    "sapling",
)

# Whole-word matches; short terms like "ad" would otherwise hit "adhesive"
NON_PRODUCT_TERMS: tuple[str, ...] = (
    "credit card",
    "bill",
    "payment",
    "service",
    "subscription",
    "gift card",
    "voucher",
    "coupon",
    "offer",
    "deal",
    "promotion",
    "advertisement",
    "sponsored",
    "ad",
    "banner",
    "link",
    "click here",
    "learn more",
)

# Case-sensitive pagination/navigation artifacts
NAVIGATION_ARTIFACTS: tuple[str, ...] = (
    "See More",
    "Page",
)

MIN_TITLE_LENGTH = 10

# Accessory-sounding words; used by the generic_terms branding strategy
GENERIC_PRODUCT_TERMS: tuple[str, ...] = (
    "bottle",
    "cable",
    "cover",
    "case",
    "adapter",
    "charger",
    "holder",
    "stand",
    "mount",
    "grip",
    "protector",
    "screen guard",
    "tempered glass",
    "wire",
    "cord",
    "plug",
    "socket",
    "extension",
    "splitter",
    "hub",
    "dock",
    "station",
    "base",
    "support",
    "bracket",
    "clamp",
    "strap",
    "band",
    "chain",
    "ring",
    "hook",
    "clip",
    "pin",
    "button",
)

DEFAULT_CATEGORY = "General"

# Ordered: earlier groups win on overlap ("fitness band" is sports, not electronics).
# Whole-word matches, plural forms included.
CATEGORY_KEYWORD_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Sports & Fitness",
        (
            "yoga",
            "dumbbell",
            "fitness",
            "gym",
            "cricket",
            "badminton",
            "football",
            "treadmill",
            "skipping rope",
            "resistance band",
            "cycling",
        ),
    ),
    (
        "Electronics",
        (
            "phone",
            "laptop",
            "headphone",
            "earbuds",
            "speaker",
            "camera",
            "charger",
            "power bank",
            "smartwatch",
            "tablet",
            "usb",
            "bluetooth",
        ),
    ),
    (
        "Home & Kitchen",
        (
            "kitchen",
            "cookware",
            "bottle",
            "container",
            "garbage",
            "wall hook",
            "bedsheet",
            "pillow",
            "curtain",
            "storage",
            "mop",
            "pan",
        ),
    ),
    (
        "Clothing & Accessories",
        (
            "t-shirt",
            "shirt",
            "kurta",
            "saree",
            "jeans",
            "trouser",
            "hipster",
            "brief",
            "socks",
            "jacket",
        ),
    ),
    (
        "Beauty & Personal Care",
        (
            "serum",
            "shampoo",
            "soap",
            "face wash",
            "moisturizer",
            "lipstick",
            "sunscreen",
            "hair oil",
            "trimmer",
        ),
    ),
    (
        "Bags, Wallets and Luggage",
        (
            "trolley",
            "luggage",
            "backpack",
            "wallet",
            "suitcase",
            "duffel",
        ),
    ),
    (
        "Shoes & Handbags",
        (
            "shoes",
            "sneakers",
            "flip-flop",
            "flipflops",
            "sandals",
            "slippers",
            "handbag",
        ),
    ),
    (
        "Grocery & Gourmet Foods",
        (
            "dal",
            "salt",
            "rice",
            "atta",
            "oil",
            "tea",
            "coffee",
            "snack",
            "masala",
        ),
    ),
    (
        "Books",
        (
            "book",
            "novel",
            "paperback",
            "hardcover",
            "edition",
        ),
    ),
    (
        "Toys & Games",
        (
            "toy",
            "puzzle",
            "lego",
            "board game",
            "doll",
            "action figure",
        ),
    ),
    (
        "Automotive",
        (
            "car",
            "bike",
            "helmet",
            "tyre",
            "motorcycle",
            "dashboard",
        ),
    ),
)

# Marketplace bestseller slugs and their display labels
MARKETPLACE_CATEGORIES: dict[str, str] = {
    "electronics": "Electronics",
    "home-kitchen": "Home & Kitchen",
    "clothing-accessories": "Clothing & Accessories",
    "beauty-personal-care": "Beauty & Personal Care",
    "sports-fitness": "Shoes & Handbags",
    "books": "Books",
    "toys-games": "Toys & Games",
    "automotive": "Automotive",
    "grocery-gourmet-foods": "Grocery & Gourmet Foods",
}
