"""
Sample catalog rows for local development.
"""

import logging
from decimal import Decimal
from itertools import cycle

from atelier.components.catalog import CatalogRepoPort

logger = logging.getLogger(__name__)

COURSE_TITLES = (
    "Silk Thread Embroidery",
    "Block Printing Basics",
    "Natural Dyeing",
    "Hand Loom Weaving",
    "Zardozi Masterclass",
    "Quilting for Beginners",
    "Macrame Wall Hangings",
    "Kantha Stitch Workshop",
)

PRODUCT_NAMES = (
    ("Cotton Thread Set", "Threads"),
    ("Bamboo Hoop", "Tools"),
    ("Indigo Dye Kit", "Dyes"),
    ("Brass Needle Pack", "Tools"),
    ("Silk Floss Bundle", "Threads"),
    ("Madder Root Powder", "Dyes"),
)


def _discounted(price: Decimal, percentage: Decimal) -> Decimal:
    return (price * (100 - percentage) / 100).quantize(Decimal("0.01"))


def seed_catalog(
    course_repo: CatalogRepoPort,
    product_repo: CatalogRepoPort,
    count: int = 24,
) -> tuple[int, int]:
    """Insert `count` courses and `count` products. Returns the numbers inserted."""
    titles = cycle(COURSE_TITLES)
    products = cycle(PRODUCT_NAMES)

    for i in range(count):
        price = Decimal(1500 + 250 * (i % 7))
        percentage = Decimal(5 * (i % 5))
        course_repo.create(
            {
                "title": f"{next(titles)} {i // len(COURSE_TITLES) + 1}",
                "description": "Hands-on studio course.",
                "max_price": price,
                "discounted_price": _discounted(price, percentage),
                "discount_percentage": percentage,
            }
        )

        name, category = next(products)
        product_repo.create(
            {
                "name": f"{name} #{i + 1}",
                "category": category,
                "price": Decimal(120 + 35 * (i % 9)),
                "description": "Studio supply.",
                "is_featured": 1 if i % 4 == 0 else 0,
            }
        )

    logger.info("Seeded %d courses and %d products", count, count)
    return count, count
