from __future__ import annotations

from dataclasses import dataclass

from vinyl_catalog.domain.product import PageMeta, Product, ProductQuery
from vinyl_catalog.ports.product_repository import ProductRepository


@dataclass(frozen=True, slots=True)
class SearchProductsRequest:
    query: ProductQuery


@dataclass(frozen=True, slots=True)
class SearchProductsResponse:
    products: list[Product]
    meta: PageMeta


class SearchProducts:
    """
    Product listing with filters, sorting and pagination.

    This use case validates the query and delegates predicate building to the
    repository adapter. Pagination metadata is derived here from the total count.
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: SearchProductsRequest) -> SearchProductsResponse:
        """
        Execute product search.

        Validates request parameters before delegating to repository.
        This is the single source of validation (contract programming).

        Args:
            request: Search parameters (filters, sort and paging)

        Returns:
            Response containing the page of products and pagination metadata

        Raises:
            PagingValidationError: If page or limit are out of range
            FilterValidationError: If price or date bounds are malformed
        """
        query = request.query
        query.validate()

        result = self._repository.search(
            filters=query.filters,
            sort=query.sort,
            paging=query.paging,
        )

        return SearchProductsResponse(
            products=result.products,
            meta=PageMeta.build(total=result.total_count, paging=query.paging),
        )
