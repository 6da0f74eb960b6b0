"""Tests for ProductMapper (DTO <-> domain conversions)."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from vinyl_catalog.domain.errors import ValidationError
from vinyl_catalog.domain.product import (
    PageMeta,
    PageRequest,
    Product,
    ProductChanges,
    ProductFilters,
    ProductSort,
    SortField,
    SortOrder,
)
from vinyl_catalog.entrypoints.http.dtos.products import (
    ProductCreateDTO,
    ProductsSearchQueryDTO,
    ProductUpdateDTO,
)
from vinyl_catalog.entrypoints.http.mappers.product_mapper import ProductMapper
from vinyl_catalog.use_cases.search_products import SearchProductsResponse


@pytest.fixture
def product() -> Product:
    return Product(
        id=7,
        title="Black Album",
        artist="Metallica",
        genre="Metal",
        release_date=date(1991, 8, 12),
        price=Decimal("29.90"),
        stock=10,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )


# ==============================================================================
# Query parameters -> ProductQuery
# ==============================================================================


def test_to_domain_query_applies_defaults() -> None:
    query = ProductMapper.to_domain_query(ProductsSearchQueryDTO())

    assert query.filters == ProductFilters()
    assert query.sort == ProductSort(field=SortField.TITLE, order=SortOrder.ASC)
    assert query.paging == PageRequest(page=1, limit=10)


def test_to_domain_query_converts_every_field() -> None:
    dto = ProductsSearchQueryDTO(
        page=3,
        limit=25,
        title="black",
        artist="metallica",
        genre="metal",
        min_price="10",
        max_price="49.99",
        release_date_from=date(1990, 1, 1),
        release_date_to=date(1999, 12, 31),
        sort_by="releaseDate",
        sort_order="DESC",
    )

    query = ProductMapper.to_domain_query(dto)

    assert query.filters == ProductFilters(
        title="black",
        artist="metallica",
        genre="metal",
        min_price=Decimal("10"),
        max_price=Decimal("49.99"),
        release_date_from=date(1990, 1, 1),
        release_date_to=date(1999, 12, 31),
    )
    assert query.sort == ProductSort(field=SortField.RELEASE_DATE, order=SortOrder.DESC)
    assert query.paging == PageRequest(page=3, limit=25)


def test_to_domain_query_rejects_unknown_sort_key() -> None:
    with pytest.raises(ValidationError) as exc_info:
        ProductMapper.to_domain_query(ProductsSearchQueryDTO(sort_by="release_date"))

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["field"] == "sort_by"


@pytest.mark.parametrize("price", ["-5", "1.", ".5", "ten", "1e3"])
def test_query_dto_rejects_malformed_prices(price: str) -> None:
    with pytest.raises(PydanticValidationError):
        ProductsSearchQueryDTO(min_price=price)


def test_query_price_bounds_keep_full_precision() -> None:
    dto = ProductsSearchQueryDTO(min_price="10.999", max_price="22.4999")

    filters = ProductMapper.to_domain_query(dto).filters

    assert filters.min_price == Decimal("10.999")
    assert filters.max_price == Decimal("22.4999")


# ==============================================================================
# Payloads -> domain
# ==============================================================================


def test_to_new_product() -> None:
    dto = ProductCreateDTO(title="Blue", artist="Joni Mitchell", price="28.00")

    new = ProductMapper.to_new_product(dto)

    assert new.price == Decimal("28.00")
    assert new.stock == 0
    assert new.genre is None


def test_to_changes_keeps_omitted_fields_unset() -> None:
    changes = ProductMapper.to_changes(ProductUpdateDTO(price="24.99"))

    assert changes == ProductChanges(price=Decimal("24.99"))
    assert changes.as_dict() == {"price": Decimal("24.99")}


def test_to_changes_with_empty_payload() -> None:
    assert ProductMapper.to_changes(ProductUpdateDTO()).is_empty()


# ==============================================================================
# Domain -> responses
# ==============================================================================


def test_to_product_response_serializes_price_as_string(product: Product) -> None:
    dto = ProductMapper.to_product_response(product)

    assert dto.price == "29.90"
    assert dto.id == 7
    assert dto.release_date == date(1991, 8, 12)


def test_to_page_response(product: Product) -> None:
    result = SearchProductsResponse(
        products=[product],
        meta=PageMeta.build(total=25, paging=PageRequest(page=3, limit=10)),
    )

    dto = ProductMapper.to_page_response(result)

    assert [item.title for item in dto.items] == ["Black Album"]
    assert dto.meta.model_dump() == {
        "total": 25,
        "page": 3,
        "limit": 10,
        "total_pages": 3,
        "has_next_page": False,
        "has_previous_page": True,
    }
