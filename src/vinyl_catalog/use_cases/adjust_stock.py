"""Adjust stock use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vinyl_catalog.domain.errors import NotFoundError, ValidationError
from vinyl_catalog.domain.product import STOCK_MAX, STOCK_MIN, StockAdjustment
from vinyl_catalog.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AdjustStockRequest:
    product_id: int
    quantity: int | None


@dataclass(frozen=True, slots=True)
class AdjustStockResponse:
    product_id: int
    stock: int


class AdjustStock:
    """
    Apply a signed delta to a product's stock.

    The bound check is delegated to the repository as one atomic bounded
    increment, so concurrent adjustments can never leave stock outside
    [STOCK_MIN, STOCK_MAX]. A refused adjustment leaves stock unchanged.
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: AdjustStockRequest) -> AdjustStockResponse:
        """
        Raises:
            ValidationError: If the id is not positive, the quantity is missing or zero,
                or the new stock would fall outside [0, 1000]
            NotFoundError: If the product doesn't exist
        """
        adjustment = StockAdjustment(product_id=request.product_id, quantity=request.quantity)
        adjustment.validate()
        quantity: int = adjustment.quantity  # type: ignore[assignment]

        outcome = self._repository.adjust_stock(
            adjustment.product_id,
            quantity,
            minimum=STOCK_MIN,
            maximum=STOCK_MAX,
        )

        if outcome is None:
            raise NotFoundError(resource="Product", identifier=str(adjustment.product_id))

        if not outcome.applied:
            logger.info(
                "Stock adjustment refused",
                extra={
                    "product_id": adjustment.product_id,
                    "quantity": quantity,
                    "current_stock": outcome.stock,
                },
            )
            if outcome.stock + quantity > STOCK_MAX:
                raise ValidationError.for_field(
                    "quantity",
                    f"Stock cannot exceed {STOCK_MAX} units",
                    "STOCK_LIMIT_EXCEEDED",
                    current_stock=outcome.stock,
                )
            raise ValidationError.for_field(
                "quantity",
                "Stock cannot be negative",
                "NEGATIVE_STOCK",
                current_stock=outcome.stock,
            )

        logger.info(
            "Stock adjusted",
            extra={
                "product_id": adjustment.product_id,
                "quantity": quantity,
                "stock": outcome.stock,
            },
        )

        return AdjustStockResponse(product_id=adjustment.product_id, stock=outcome.stock)
