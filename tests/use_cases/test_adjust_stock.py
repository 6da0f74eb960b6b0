"""Test suite for the AdjustStock use case."""

from __future__ import annotations

import threading
from decimal import Decimal
from unittest.mock import Mock

import pytest

from vinyl_catalog.adapters.in_memory_product_repository import InMemoryProductRepository
from vinyl_catalog.domain.errors import NotFoundError, ValidationError
from vinyl_catalog.domain.product import STOCK_MAX, Product
from vinyl_catalog.ports.product_repository import ProductRepository, StockUpdate
from vinyl_catalog.use_cases.adjust_stock import (
    AdjustStock,
    AdjustStockRequest,
    AdjustStockResponse,
)


def product_with_stock(stock: int, product_id: int = 1) -> Product:
    return Product(
        id=product_id,
        title="Kind of Blue",
        artist="Miles Davis",
        price=Decimal("45.00"),
        stock=stock,
    )


@pytest.fixture()
def mock_repository() -> Mock:
    return Mock(spec=ProductRepository)


def adjust(repository: ProductRepository, product_id: int, quantity: int | None) -> AdjustStockResponse:
    use_case = AdjustStock(product_repository=repository)
    return use_case.execute(AdjustStockRequest(product_id=product_id, quantity=quantity))


# ==============================================================================
# Happy Path
# ==============================================================================


def test_increment_reaching_the_upper_bound_succeeds() -> None:
    repository = InMemoryProductRepository([product_with_stock(995)])

    response = adjust(repository, 1, 5)

    assert response == AdjustStockResponse(product_id=1, stock=1000)
    assert repository.get_by_id(1).stock == 1000  # type: ignore[union-attr]


def test_decrement_to_zero_succeeds() -> None:
    repository = InMemoryProductRepository([product_with_stock(3)])

    response = adjust(repository, 1, -3)

    assert response.stock == 0


def test_passes_bounds_to_repository(mock_repository: Mock) -> None:
    mock_repository.adjust_stock.return_value = StockUpdate(applied=True, stock=12)

    adjust(mock_repository, 7, 2)

    mock_repository.adjust_stock.assert_called_once_with(7, 2, minimum=0, maximum=STOCK_MAX)


# ==============================================================================
# Bound violations leave stock unchanged
# ==============================================================================


def test_exceeding_upper_bound_fails_and_keeps_stock() -> None:
    repository = InMemoryProductRepository([product_with_stock(995)])

    with pytest.raises(ValidationError) as exc_info:
        adjust(repository, 1, 10)

    assert exc_info.value.message == "Stock cannot exceed 1000 units"
    assert exc_info.value.errors[0]["code"] == "STOCK_LIMIT_EXCEEDED"
    assert exc_info.value.context == {"current_stock": 995}
    assert repository.get_by_id(1).stock == 995  # type: ignore[union-attr]


def test_going_negative_fails_and_keeps_stock() -> None:
    repository = InMemoryProductRepository([product_with_stock(4)])

    with pytest.raises(ValidationError) as exc_info:
        adjust(repository, 1, -5)

    assert exc_info.value.message == "Stock cannot be negative"
    assert exc_info.value.errors[0]["code"] == "NEGATIVE_STOCK"
    assert repository.get_by_id(1).stock == 4  # type: ignore[union-attr]


def test_product_stocked_above_bound_can_only_go_down_into_range() -> None:
    repository = InMemoryProductRepository([product_with_stock(1500)])

    with pytest.raises(ValidationError):
        adjust(repository, 1, -10)

    assert adjust(repository, 1, -600).stock == 900


# ==============================================================================
# Request validation happens before storage access
# ==============================================================================


@pytest.mark.parametrize("stock", [0, 500, 1000])
def test_zero_quantity_always_fails(mock_repository: Mock, stock: int) -> None:
    mock_repository.get_by_id.return_value = product_with_stock(stock)

    with pytest.raises(ValidationError) as exc_info:
        adjust(mock_repository, 1, 0)

    assert exc_info.value.errors[0]["code"] == "ZERO_QUANTITY"
    mock_repository.adjust_stock.assert_not_called()


def test_missing_quantity_fails(mock_repository: Mock) -> None:
    with pytest.raises(ValidationError) as exc_info:
        adjust(mock_repository, 1, None)

    assert exc_info.value.message == "Quantity is required to update the stock"
    mock_repository.adjust_stock.assert_not_called()


@pytest.mark.parametrize("product_id", [0, -4])
def test_non_positive_id_fails(mock_repository: Mock, product_id: int) -> None:
    with pytest.raises(ValidationError) as exc_info:
        adjust(mock_repository, product_id, 5)

    assert exc_info.value.errors[0]["field"] == "product_id"
    mock_repository.adjust_stock.assert_not_called()


def test_unknown_product_raises_not_found() -> None:
    repository = InMemoryProductRepository([product_with_stock(10)])

    with pytest.raises(NotFoundError) as exc_info:
        adjust(repository, 99, 5)

    assert exc_info.value.message == "Product with id 99 not found"


# ==============================================================================
# Concurrency
# ==============================================================================


def test_concurrent_increments_never_exceed_upper_bound() -> None:
    repository = InMemoryProductRepository([product_with_stock(990)])
    use_case = AdjustStock(product_repository=repository)
    outcomes: list[bool] = []
    outcomes_lock = threading.Lock()
    start = threading.Barrier(20)

    def worker() -> None:
        start.wait()
        try:
            use_case.execute(AdjustStockRequest(product_id=1, quantity=1))
            succeeded = True
        except ValidationError:
            succeeded = False
        with outcomes_lock:
            outcomes.append(succeeded)

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count(True) == 10
    assert outcomes.count(False) == 10
    assert repository.get_by_id(1).stock == 1000  # type: ignore[union-attr]


def test_concurrent_mixed_adjustments_stay_within_bounds() -> None:
    repository = InMemoryProductRepository([product_with_stock(5)])
    use_case = AdjustStock(product_repository=repository)
    start = threading.Barrier(30)

    def worker(quantity: int) -> None:
        start.wait()
        try:
            use_case.execute(AdjustStockRequest(product_id=1, quantity=quantity))
        except ValidationError:
            pass

    quantities = [-1] * 20 + [3] * 10
    threads = [threading.Thread(target=worker, args=(q,)) for q in quantities]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    final = repository.get_by_id(1).stock  # type: ignore[union-attr]
    assert 0 <= final <= STOCK_MAX
