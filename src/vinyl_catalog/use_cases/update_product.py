"""Update product use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vinyl_catalog.domain.errors import ConflictError, NotFoundError
from vinyl_catalog.domain.product import Product, ProductChanges, validate_product_id
from vinyl_catalog.ports.product_repository import DuplicateProductError, ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateProductRequest:
    product_id: int
    changes: ProductChanges


@dataclass(frozen=True, slots=True)
class UpdateProductResponse:
    product: Product


class UpdateProduct:
    """
    Use case for partially updating a listing.

    Supplied fields are re-validated against the creation invariants.
    An empty change set returns the current product untouched.
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: UpdateProductRequest) -> UpdateProductResponse:
        """
        Raises:
            ValidationError: If product_id is not positive or a supplied field is invalid
            NotFoundError: If the product doesn't exist
            ConflictError: If the change collides with another product's title and artist
        """
        product_id = validate_product_id(request.product_id)
        request.changes.validate()

        if request.changes.is_empty():
            product = self._repository.get_by_id(product_id)
            if product is None:
                raise NotFoundError(resource="Product", identifier=str(product_id))
            return UpdateProductResponse(product=product)

        try:
            product = self._repository.update(product_id, request.changes)
        except DuplicateProductError as exc:
            raise ConflictError(
                f"Product already exists: {exc.title} by {exc.artist}",
                title=exc.title,
                artist=exc.artist,
            ) from exc

        if product is None:
            raise NotFoundError(resource="Product", identifier=str(product_id))

        logger.info(
            "Product updated",
            extra={"product_id": product_id, "fields": sorted(request.changes.as_dict())},
        )

        return UpdateProductResponse(product=product)
