"""Delete product use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vinyl_catalog.domain.errors import NotFoundError
from vinyl_catalog.domain.product import Product, validate_product_id
from vinyl_catalog.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeleteProductRequest:
    product_id: int


@dataclass(frozen=True, slots=True)
class DeleteProductResponse:
    product: Product


class DeleteProduct:
    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: DeleteProductRequest) -> DeleteProductResponse:
        """
        Remove a product and return the deleted record.

        Raises:
            ValidationError: If product_id is not a positive integer
            NotFoundError: If the product doesn't exist
        """
        product_id = validate_product_id(request.product_id)

        product = self._repository.delete(product_id)

        if product is None:
            raise NotFoundError(resource="Product", identifier=str(product_id))

        logger.info("Product deleted", extra={"product_id": product_id})

        return DeleteProductResponse(product=product)
