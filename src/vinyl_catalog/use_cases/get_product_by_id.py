"""Get product by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from vinyl_catalog.domain.errors import NotFoundError
from vinyl_catalog.domain.product import Product, validate_product_id
from vinyl_catalog.ports.product_repository import ProductRepository


@dataclass(frozen=True, slots=True)
class GetProductByIdRequest:
    """Request to get a product by ID."""

    product_id: int


@dataclass(frozen=True, slots=True)
class GetProductByIdResponse:
    """Response containing the requested product."""

    product: Product


class GetProductById:
    """
    Use case for retrieving a single product by ID.

    Responsibilities:
    - Validate product_id (must be a positive integer)
    - Delegate to repository for data access
    - Raise NotFoundError if the product doesn't exist
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: GetProductByIdRequest) -> GetProductByIdResponse:
        """
        Raises:
            ValidationError: If product_id is not a positive integer
            NotFoundError: If the product doesn't exist
        """
        product_id = validate_product_id(request.product_id)

        product = self._repository.get_by_id(product_id)

        if product is None:
            raise NotFoundError(resource="Product", identifier=str(product_id))

        return GetProductByIdResponse(product=product)
