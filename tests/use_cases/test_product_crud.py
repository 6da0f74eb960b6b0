"""Test suite for the create/get/update/delete use cases."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from unittest.mock import Mock

import pytest

from vinyl_catalog.adapters.in_memory_product_repository import InMemoryProductRepository
from vinyl_catalog.domain.errors import ConflictError, NotFoundError, ValidationError
from vinyl_catalog.domain.product import NewProduct, Product, ProductChanges
from vinyl_catalog.ports.product_repository import DuplicateProductError, ProductRepository
from vinyl_catalog.use_cases.create_product import CreateProduct, CreateProductRequest
from vinyl_catalog.use_cases.delete_product import DeleteProduct, DeleteProductRequest
from vinyl_catalog.use_cases.get_product_by_id import (
    GetProductById,
    GetProductByIdRequest,
    GetProductByIdResponse,
)
from vinyl_catalog.use_cases.update_product import UpdateProduct, UpdateProductRequest


@pytest.fixture()
def mock_repository() -> Mock:
    return Mock(spec=ProductRepository)


@pytest.fixture()
def repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture()
def nevermind() -> NewProduct:
    return NewProduct(
        title="Nevermind",
        artist="Nirvana",
        genre="Grunge",
        release_date=date(1991, 9, 24),
        price=Decimal("22.50"),
        stock=8,
    )


@pytest.fixture()
def stored(repository: InMemoryProductRepository, nevermind: NewProduct) -> Product:
    return repository.add(nevermind)


# ==============================================================================
# CreateProduct
# ==============================================================================


def test_create_returns_stored_product(
    repository: InMemoryProductRepository, nevermind: NewProduct
) -> None:
    response = CreateProduct(repository).execute(CreateProductRequest(product=nevermind))

    product = response.product
    assert product.id == 1
    assert product.title == "Nevermind"
    assert product.price == Decimal("22.50")
    assert product.created_at is not None
    assert repository.get_by_id(1) == product


def test_create_with_zero_price_fails_before_storage(mock_repository: Mock) -> None:
    new = NewProduct(title="Nevermind", artist="Nirvana", price=Decimal("0"))

    with pytest.raises(ValidationError) as exc_info:
        CreateProduct(mock_repository).execute(CreateProductRequest(product=new))

    assert exc_info.value.errors[0]["field"] == "price"
    mock_repository.add.assert_not_called()


def test_create_with_negative_stock_fails(mock_repository: Mock) -> None:
    new = NewProduct(title="Nevermind", artist="Nirvana", price=Decimal("10"), stock=-1)

    with pytest.raises(ValidationError):
        CreateProduct(mock_repository).execute(CreateProductRequest(product=new))

    mock_repository.add.assert_not_called()


def test_create_with_blank_title_fails(mock_repository: Mock) -> None:
    new = NewProduct(title="   ", artist="Nirvana", price=Decimal("10"))

    with pytest.raises(ValidationError) as exc_info:
        CreateProduct(mock_repository).execute(CreateProductRequest(product=new))

    assert exc_info.value.errors[0]["field"] == "title"


def test_create_duplicate_title_and_artist_conflicts(
    repository: InMemoryProductRepository, nevermind: NewProduct, stored: Product
) -> None:
    with pytest.raises(ConflictError) as exc_info:
        CreateProduct(repository).execute(CreateProductRequest(product=nevermind))

    assert exc_info.value.message == "Product already exists: Nevermind by Nirvana"
    assert exc_info.value.context == {"title": "Nevermind", "artist": "Nirvana"}


def test_create_translates_port_duplicate_error(mock_repository: Mock, nevermind: NewProduct) -> None:
    mock_repository.add.side_effect = DuplicateProductError(title="Nevermind", artist="Nirvana")

    with pytest.raises(ConflictError):
        CreateProduct(mock_repository).execute(CreateProductRequest(product=nevermind))


def test_same_title_different_artist_is_allowed(
    repository: InMemoryProductRepository, stored: Product
) -> None:
    cover = NewProduct(title="Nevermind", artist="Tribute Band", price=Decimal("9.99"))

    response = CreateProduct(repository).execute(CreateProductRequest(product=cover))

    assert response.product.id == 2


# ==============================================================================
# GetProductById
# ==============================================================================


def test_get_returns_product(repository: InMemoryProductRepository, stored: Product) -> None:
    response = GetProductById(repository).execute(GetProductByIdRequest(product_id=stored.id))

    assert response == GetProductByIdResponse(product=stored)


def test_get_missing_raises_not_found(repository: InMemoryProductRepository) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        GetProductById(repository).execute(GetProductByIdRequest(product_id=5))

    assert exc_info.value.context == {"resource": "Product", "identifier": "5"}


def test_get_rejects_non_positive_id(mock_repository: Mock) -> None:
    with pytest.raises(ValidationError):
        GetProductById(mock_repository).execute(GetProductByIdRequest(product_id=0))

    mock_repository.get_by_id.assert_not_called()


# ==============================================================================
# UpdateProduct
# ==============================================================================


def test_update_applies_supplied_fields_only(
    repository: InMemoryProductRepository, stored: Product
) -> None:
    request = UpdateProductRequest(
        product_id=stored.id,
        changes=ProductChanges(price=Decimal("19.99"), stock=0),
    )

    updated = UpdateProduct(repository).execute(request).product

    assert updated.price == Decimal("19.99")
    assert updated.stock == 0
    assert updated.title == stored.title
    assert updated.genre == stored.genre


def test_update_with_empty_changes_returns_current(
    repository: InMemoryProductRepository, stored: Product
) -> None:
    request = UpdateProductRequest(product_id=stored.id, changes=ProductChanges())

    assert UpdateProduct(repository).execute(request).product == stored


def test_update_logs_only_when_something_was_written(
    repository: InMemoryProductRepository, stored: Product, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="vinyl_catalog.use_cases.update_product")
    use_case = UpdateProduct(repository)

    use_case.execute(UpdateProductRequest(product_id=stored.id, changes=ProductChanges()))
    assert not [r for r in caplog.records if r.getMessage() == "Product updated"]

    use_case.execute(UpdateProductRequest(product_id=stored.id, changes=ProductChanges(stock=2)))
    updates = [r for r in caplog.records if r.getMessage() == "Product updated"]
    assert len(updates) == 1
    assert updates[0].fields == ["stock"]


def test_update_missing_raises_not_found(repository: InMemoryProductRepository) -> None:
    request = UpdateProductRequest(product_id=3, changes=ProductChanges(stock=1))

    with pytest.raises(NotFoundError):
        UpdateProduct(repository).execute(request)


def test_update_empty_changes_on_missing_raises_not_found(
    repository: InMemoryProductRepository,
) -> None:
    with pytest.raises(NotFoundError):
        UpdateProduct(repository).execute(UpdateProductRequest(product_id=3, changes=ProductChanges()))


@pytest.mark.parametrize(
    "changes",
    [ProductChanges(price=Decimal("0")), ProductChanges(stock=-1), ProductChanges(artist="")],
)
def test_update_rejects_invalid_fields_before_storage(
    mock_repository: Mock, changes: ProductChanges
) -> None:
    with pytest.raises(ValidationError):
        UpdateProduct(mock_repository).execute(UpdateProductRequest(product_id=1, changes=changes))

    mock_repository.update.assert_not_called()


def test_update_rejects_non_positive_id(mock_repository: Mock) -> None:
    request = UpdateProductRequest(product_id=-1, changes=ProductChanges(stock=1))

    with pytest.raises(ValidationError):
        UpdateProduct(mock_repository).execute(request)


def test_update_into_existing_title_and_artist_conflicts(
    repository: InMemoryProductRepository, stored: Product
) -> None:
    other = repository.add(NewProduct(title="In Utero", artist="Nirvana", price=Decimal("21")))
    request = UpdateProductRequest(product_id=other.id, changes=ProductChanges(title="Nevermind"))

    with pytest.raises(ConflictError):
        UpdateProduct(repository).execute(request)

    assert repository.get_by_id(other.id).title == "In Utero"  # type: ignore[union-attr]


# ==============================================================================
# DeleteProduct
# ==============================================================================


def test_delete_returns_removed_product(
    repository: InMemoryProductRepository, stored: Product
) -> None:
    response = DeleteProduct(repository).execute(DeleteProductRequest(product_id=stored.id))

    assert response.product == stored
    assert repository.get_by_id(stored.id) is None


def test_delete_missing_raises_not_found(repository: InMemoryProductRepository) -> None:
    with pytest.raises(NotFoundError):
        DeleteProduct(repository).execute(DeleteProductRequest(product_id=1))


def test_delete_rejects_non_positive_id(mock_repository: Mock) -> None:
    with pytest.raises(ValidationError):
        DeleteProduct(mock_repository).execute(DeleteProductRequest(product_id=0))

    mock_repository.delete.assert_not_called()
