from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from vinyl_catalog.domain.product import (
    NewProduct,
    PageRequest,
    Product,
    ProductChanges,
    ProductFilters,
    ProductSort,
    SortField,
)
from vinyl_catalog.ports.product_repository import (
    DuplicateProductError,
    ProductRepository,
    SearchResult,
    StockUpdate,
)

_SORT_ATTRIBUTES: dict[SortField, str] = {
    SortField.PRICE: "price",
    SortField.TITLE: "title",
    SortField.ARTIST: "artist",
    SortField.RELEASE_DATE: "release_date",
    SortField.STOCK: "stock",
    SortField.CREATED_AT: "created_at",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def _ordered(
    products: Iterable[Product],
    key: Callable[[Product], Any],
    descending: bool = False,
) -> list[Product]:
    """Sort by key with NULLs last in both directions and id as tiebreaker."""
    by_id = sorted(products, key=lambda product: product.id)
    present = [product for product in by_id if key(product) is not None]
    missing = [product for product in by_id if key(product) is None]
    # list.sort stays stable with reverse=True, so equal keys keep id order
    present.sort(key=key, reverse=descending)
    return present + missing


class InMemoryProductRepository(ProductRepository):
    """
    Canonical contract implementation for tests.

    - Assigns increasing integer ids
    - Applies AND-semantics filtering
    - Orders by the sort key (NULLs last), then id
    - Applies paging AFTER filtering and ordering
    - Enforces (title, artist) uniqueness, case-sensitively like a plain unique index
    - Serializes writes with a lock so bounded increments are atomic
    """

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[int, Product] = {}
        self._lock = threading.Lock()
        for product in products or []:
            self._products[product.id] = product
        self._next_id = max(self._products, default=0) + 1

    def search(self, filters: ProductFilters, sort: ProductSort, paging: PageRequest) -> SearchResult:
        # Trust that UseCase has validated inputs (contract programming)
        with self._lock:
            snapshot = list(self._products.values())

        matches = [product for product in snapshot if self._matches(product, filters)]
        total_count = len(matches)  # Count BEFORE paging

        attribute = _SORT_ATTRIBUTES[sort.field]
        ordered = _ordered(matches, key=lambda p: getattr(p, attribute), descending=sort.descending)

        start = paging.offset
        end = paging.offset + paging.limit

        return SearchResult(products=ordered[start:end], total_count=total_count)

    def get_by_id(self, product_id: int) -> Product | None:
        with self._lock:
            return self._products.get(product_id)

    def add(self, product: NewProduct) -> Product:
        with self._lock:
            self._ensure_unique(product.title, product.artist)
            now = _utcnow()
            created = Product(
                id=self._next_id,
                title=product.title,
                artist=product.artist,
                genre=product.genre,
                release_date=product.release_date,
                price=product.price,
                stock=product.stock,
                created_at=now,
                updated_at=now,
            )
            self._products[created.id] = created
            self._next_id += 1
            return created

    def update(self, product_id: int, changes: ProductChanges) -> Product | None:
        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                return None

            updated = replace(current, **changes.as_dict(), updated_at=_utcnow())
            if (updated.title, updated.artist) != (current.title, current.artist):
                self._ensure_unique(updated.title, updated.artist, ignore_id=product_id)

            self._products[product_id] = updated
            return updated

    def delete(self, product_id: int) -> Product | None:
        with self._lock:
            return self._products.pop(product_id, None)

    def adjust_stock(
        self,
        product_id: int,
        quantity: int,
        minimum: int,
        maximum: int,
    ) -> StockUpdate | None:
        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                return None

            new_stock = current.stock + quantity
            if not minimum <= new_stock <= maximum:
                return StockUpdate(applied=False, stock=current.stock)

            self._products[product_id] = replace(current, stock=new_stock, updated_at=_utcnow())
            return StockUpdate(applied=True, stock=new_stock)

    def find_by_artist(self, artist: str) -> list[Product]:
        with self._lock:
            snapshot = list(self._products.values())
        matches = [p for p in snapshot if _contains(p.artist, artist)]
        return _ordered(matches, key=lambda p: p.title)

    def find_by_genre(self, genre: str) -> list[Product]:
        with self._lock:
            snapshot = list(self._products.values())
        matches = [p for p in snapshot if _contains(p.genre, genre)]
        return _ordered(matches, key=lambda p: p.artist)

    def _ensure_unique(self, title: str, artist: str, ignore_id: int | None = None) -> None:
        for existing in self._products.values():
            if existing.id == ignore_id:
                continue
            if existing.title == title and existing.artist == artist:
                raise DuplicateProductError(title=title, artist=artist)

    def _matches(self, product: Product, filters: ProductFilters) -> bool:
        for name, needle in filters.text_filters().items():
            if not _contains(getattr(product, name), needle):
                return False
        if filters.min_price is not None and product.price < filters.min_price:
            return False
        if filters.max_price is not None and product.price > filters.max_price:
            return False
        if filters.release_date_from is not None and (
            product.release_date is None or product.release_date < filters.release_date_from
        ):
            return False
        if filters.release_date_to is not None and (
            product.release_date is None or product.release_date > filters.release_date_to
        ):
            return False
        return True
