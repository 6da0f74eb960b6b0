from __future__ import annotations

from dataclasses import dataclass

from vinyl_catalog.domain.errors import ValidationError
from vinyl_catalog.domain.product import Product
from vinyl_catalog.ports.product_repository import ProductRepository


@dataclass(frozen=True, slots=True)
class FindProductsByArtistRequest:
    artist: str


@dataclass(frozen=True, slots=True)
class FindProductsByArtistResponse:
    products: list[Product]


class FindProductsByArtist:
    """Case-insensitive substring lookup on artist, ordered by title."""

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: FindProductsByArtistRequest) -> FindProductsByArtistResponse:
        artist = request.artist.strip() if request.artist else ""
        if not artist:
            raise ValidationError.for_field("artist", "Artist cannot be empty", "EMPTY")

        return FindProductsByArtistResponse(products=self._repository.find_by_artist(artist))
