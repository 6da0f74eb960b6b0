from __future__ import annotations

from dataclasses import dataclass

from vinyl_catalog.domain.errors import ValidationError
from vinyl_catalog.domain.product import Product
from vinyl_catalog.ports.product_repository import ProductRepository


@dataclass(frozen=True, slots=True)
class FindProductsByGenreRequest:
    genre: str


@dataclass(frozen=True, slots=True)
class FindProductsByGenreResponse:
    products: list[Product]


class FindProductsByGenre:
    """Case-insensitive substring lookup on genre, ordered by artist."""

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: FindProductsByGenreRequest) -> FindProductsByGenreResponse:
        genre = request.genre.strip() if request.genre else ""
        if not genre:
            raise ValidationError.for_field("genre", "Genre cannot be empty", "EMPTY")

        return FindProductsByGenreResponse(products=self._repository.find_by_genre(genre))
