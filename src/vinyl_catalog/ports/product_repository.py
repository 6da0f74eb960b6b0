from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from vinyl_catalog.domain.product import (
    NewProduct,
    PageRequest,
    Product,
    ProductChanges,
    ProductFilters,
    ProductSort,
)


class DuplicateProductError(Exception):
    """Storage rejected a write because (title, artist) is already taken."""

    def __init__(self, title: str, artist: str) -> None:
        self.title = title
        self.artist = artist
        super().__init__(f"Product already exists: {title} by {artist}")


@dataclass(frozen=True)
class SearchResult:
    """Page of products plus the total number of matches before paging."""

    products: list[Product]
    total_count: int


@dataclass(frozen=True)
class StockUpdate:
    """Outcome of a bounded increment.

    When applied, stock is the new value. When refused, stock is the
    current value, left untouched.
    """

    applied: bool
    stock: int


class ProductRepository(ABC):
    """
    Port for catalog data access (the storage collaborator).

    Missing rows are reported as None; uniqueness violations as DuplicateProductError.

    Contract (Preconditions):
        - all arguments are pre-validated by the caller (UseCase)
        - implementations trust inputs are valid and do not re-validate
    """

    @abstractmethod
    def search(self, filters: ProductFilters, sort: ProductSort, paging: PageRequest) -> SearchResult:
        """
        Count matches and fetch one ordered page, using the same predicate set.

        Args:
            filters: Filter criteria (AND semantics) - pre-validated
            sort: Sort key and direction; ties are broken by id ascending
            paging: Offset/limit source - pre-validated

        Returns:
            SearchResult with the page of products and the total match count
        """
        ...

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None: ...

    @abstractmethod
    def add(self, product: NewProduct) -> Product:
        """
        Insert a product and return it with id and timestamps set.

        Raises:
            DuplicateProductError: If (title, artist) already exists
        """
        ...

    @abstractmethod
    def update(self, product_id: int, changes: ProductChanges) -> Product | None:
        """
        Apply supplied fields; None if the product does not exist.

        Raises:
            DuplicateProductError: If the change collides with another (title, artist)
        """
        ...

    @abstractmethod
    def delete(self, product_id: int) -> Product | None:
        """Remove a product and return it; None if it does not exist."""
        ...

    @abstractmethod
    def adjust_stock(
        self,
        product_id: int,
        quantity: int,
        minimum: int,
        maximum: int,
    ) -> StockUpdate | None:
        """
        Atomically add quantity to stock if the result stays within [minimum, maximum].

        The bound check and the increment must be a single step with respect to
        concurrent adjustments on the same product.

        Returns:
            None if the product does not exist, otherwise a StockUpdate
        """
        ...

    @abstractmethod
    def find_by_artist(self, artist: str) -> list[Product]:
        """Case-insensitive substring match on artist, ordered by title."""
        ...

    @abstractmethod
    def find_by_genre(self, genre: str) -> list[Product]:
        """Case-insensitive substring match on genre, ordered by artist."""
        ...
