#!/usr/bin/env python3
"""
Seed the products table with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Respects the (title, artist) uniqueness constraint

Usage:
    python scripts/seed_products.py
"""

from __future__ import annotations

import random
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vinyl_catalog.domain.product import STOCK_MAX
from vinyl_catalog.infra.db.models.product import ProductRow
from vinyl_catalog.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results


# ==============================================================================
# Catalog Data
# ==============================================================================

# (title, artist, genre, release date)
ALBUMS = [
    ("Metallica", "Metallica", "Metal", date(1991, 8, 12)),
    ("Master of Puppets", "Metallica", "Metal", date(1986, 3, 3)),
    ("Nevermind", "Nirvana", "Grunge", date(1991, 9, 24)),
    ("In Utero", "Nirvana", "Grunge", date(1993, 9, 21)),
    ("OK Computer", "Radiohead", "Alternative Rock", date(1997, 5, 21)),
    ("Kid A", "Radiohead", "Electronic", date(2000, 10, 2)),
    ("Abbey Road", "The Beatles", "Rock", date(1969, 9, 26)),
    ("Revolver", "The Beatles", "Rock", date(1966, 8, 5)),
    ("The Dark Side of the Moon", "Pink Floyd", "Progressive Rock", date(1973, 3, 1)),
    ("Wish You Were Here", "Pink Floyd", "Progressive Rock", date(1975, 9, 12)),
    ("Kind of Blue", "Miles Davis", "Jazz", date(1959, 8, 17)),
    ("Bitches Brew", "Miles Davis", "Jazz", date(1970, 3, 30)),
    ("A Love Supreme", "John Coltrane", "Jazz", date(1965, 1, 1)),
    ("Blue", "Joni Mitchell", "Folk", date(1971, 6, 22)),
    ("Rumours", "Fleetwood Mac", "Rock", date(1977, 2, 4)),
    ("Thriller", "Michael Jackson", "Pop", date(1982, 11, 30)),
    ("Purple Rain", "Prince", "Pop", date(1984, 6, 25)),
    ("Illmatic", "Nas", "Hip Hop", date(1994, 4, 19)),
    ("To Pimp a Butterfly", "Kendrick Lamar", "Hip Hop", date(2015, 3, 15)),
    ("Random Access Memories", "Daft Punk", "Electronic", date(2013, 5, 17)),
    ("Discovery", "Daft Punk", "Electronic", date(2001, 3, 12)),
    ("Unknown Pleasures", "Joy Division", "Post-Punk", date(1979, 6, 15)),
    ("London Calling", "The Clash", "Punk", date(1979, 12, 14)),
    ("Back in Black", "AC/DC", "Hard Rock", date(1980, 7, 25)),
    ("Paranoid", "Black Sabbath", "Metal", date(1970, 9, 18)),
]

# Price bands by decade of release (older pressings cost more)
PRICE_BANDS = {
    1950: (Decimal("35.00"), Decimal("60.00")),
    1960: (Decimal("30.00"), Decimal("55.00")),
    1970: (Decimal("25.00"), Decimal("45.00")),
    1980: (Decimal("22.00"), Decimal("40.00")),
    1990: (Decimal("20.00"), Decimal("35.00")),
    2000: (Decimal("18.00"), Decimal("32.00")),
    2010: (Decimal("18.00"), Decimal("30.00")),
}


def calculate_price(release_date: date) -> Decimal:
    """Random price within the band for the album's decade, rounded to .99."""
    decade = min(max(release_date.year // 10 * 10, 1950), 2010)
    low, high = PRICE_BANDS[decade]
    whole = random.randint(int(low), int(high))
    return Decimal(whole) + Decimal("0.99")


def generate_product(title: str, artist: str, genre: str, release_date: date) -> ProductRow:
    # Stock: mostly modest, a few near the upper bound
    stock = random.choices(
        [random.randint(0, 20), random.randint(20, 200), random.randint(900, STOCK_MAX)],
        weights=[5, 4, 1],
        k=1,
    )[0]

    return ProductRow(
        title=title,
        artist=artist,
        genre=genre,
        release_date=release_date,
        price=calculate_price(release_date),
        stock=stock,
    )


def seed_products(seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with the album catalog.

    Args:
        seed: Random seed for deterministic prices and stock
    """
    random.seed(seed)

    print(f"Seeding database with {len(ALBUMS)} products (seed={seed})...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent)
        deleted_count = session.query(ProductRow).delete()
        print(f"   Deleted {deleted_count} existing products")

        # Step 2: Generate and insert products
        products = [generate_product(*album) for album in ALBUMS]

        session.add_all(products)
        session.flush()

        print(f"Successfully seeded {len(products)} products")

        for i, product in enumerate(products[:5], 1):
            print(
                f"   {i}. {product.title} - {product.artist} "
                f"(${product.price}, stock {product.stock})"
            )

        if len(products) > 5:
            print(f"   ... and {len(products) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_products()
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
