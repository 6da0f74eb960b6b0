"""Create product use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vinyl_catalog.domain.errors import ConflictError
from vinyl_catalog.domain.product import NewProduct, Product
from vinyl_catalog.ports.product_repository import DuplicateProductError, ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreateProductRequest:
    product: NewProduct


@dataclass(frozen=True, slots=True)
class CreateProductResponse:
    product: Product


class CreateProduct:
    """
    Use case for adding a listing to the catalog.

    Responsibilities:
    - Validate creation invariants (non-blank title/artist, price > 0, stock >= 0)
    - Translate a (title, artist) uniqueness violation into ConflictError
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: CreateProductRequest) -> CreateProductResponse:
        """
        Raises:
            ProductValidationError: If a field breaks an invariant
            ConflictError: If a product with the same title and artist exists
        """
        request.product.validate()

        try:
            product = self._repository.add(request.product)
        except DuplicateProductError as exc:
            raise ConflictError(
                f"Product already exists: {exc.title} by {exc.artist}",
                title=exc.title,
                artist=exc.artist,
            ) from exc

        logger.info(
            "Product created",
            extra={"product_id": product.id, "title": product.title, "artist": product.artist},
        )

        return CreateProductResponse(product=product)
