from __future__ import annotations

from decimal import Decimal

from vinyl_catalog.domain.product import (
    NewProduct,
    PageRequest,
    Product,
    ProductChanges,
    ProductFilters,
    ProductQuery,
    ProductSort,
)
from vinyl_catalog.entrypoints.http.dtos.products import (
    PageMetaDTO,
    ProductCreateDTO,
    ProductResponseDTO,
    ProductsPageResponseDTO,
    ProductsSearchQueryDTO,
    ProductUpdateDTO,
)
from vinyl_catalog.use_cases.search_products import SearchProductsResponse


class ProductMapper:
    """Maps between REST DTOs and domain models for the product catalog."""

    @staticmethod
    def to_domain_filters(dto: ProductsSearchQueryDTO) -> ProductFilters:
        """Converts query params to domain filters, handling Decimal conversion."""
        return ProductFilters(
            title=dto.title,
            artist=dto.artist,
            genre=dto.genre,
            min_price=Decimal(dto.min_price) if dto.min_price else None,
            max_price=Decimal(dto.max_price) if dto.max_price else None,
            release_date_from=dto.release_date_from,
            release_date_to=dto.release_date_to,
        )

    @staticmethod
    def to_domain_query(dto: ProductsSearchQueryDTO) -> ProductQuery:
        """
        Builds the complete query specification from query params.

        Raises:
            SortValidationError: If sort_by or sort_order is not in the whitelist
        """
        return ProductQuery(
            filters=ProductMapper.to_domain_filters(dto),
            sort=ProductSort.parse(dto.sort_by, dto.sort_order),
            paging=PageRequest(page=dto.page, limit=dto.limit),
        )

    @staticmethod
    def to_new_product(dto: ProductCreateDTO) -> NewProduct:
        return NewProduct(
            title=dto.title,
            artist=dto.artist,
            genre=dto.genre,
            release_date=dto.release_date,
            price=Decimal(dto.price),
            stock=dto.stock,
        )

    @staticmethod
    def to_changes(dto: ProductUpdateDTO) -> ProductChanges:
        return ProductChanges(
            title=dto.title,
            artist=dto.artist,
            genre=dto.genre,
            release_date=dto.release_date,
            price=Decimal(dto.price) if dto.price is not None else None,
            stock=dto.stock,
        )

    @staticmethod
    def to_product_response(product: Product) -> ProductResponseDTO:
        """Handles Decimal -> str conversion at the boundary."""
        return ProductResponseDTO(
            id=product.id,
            title=product.title,
            artist=product.artist,
            genre=product.genre,
            release_date=product.release_date,
            price=str(product.price),
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    @staticmethod
    def to_product_list(products: list[Product]) -> list[ProductResponseDTO]:
        return [ProductMapper.to_product_response(product) for product in products]

    @staticmethod
    def to_page_response(result: SearchProductsResponse) -> ProductsPageResponseDTO:
        meta = result.meta
        return ProductsPageResponseDTO(
            items=ProductMapper.to_product_list(result.products),
            meta=PageMetaDTO(
                total=meta.total,
                page=meta.page,
                limit=meta.limit,
                total_pages=meta.total_pages,
                has_next_page=meta.has_next_page,
                has_previous_page=meta.has_previous_page,
            ),
        )
