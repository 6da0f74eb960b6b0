from fastapi import APIRouter, Depends, Response, status

from vinyl_catalog.entrypoints.http.dependencies import (
    get_adjust_stock_use_case,
    get_create_product_use_case,
    get_delete_product_use_case,
    get_find_by_artist_use_case,
    get_find_by_genre_use_case,
    get_get_product_by_id_use_case,
    get_search_products_use_case,
    get_update_product_use_case,
    require_principal,
)
from vinyl_catalog.entrypoints.http.dtos.products import (
    ProductCreateDTO,
    ProductResponseDTO,
    ProductsPageResponseDTO,
    ProductsSearchQueryDTO,
    ProductUpdateDTO,
    StockAdjustmentDTO,
)
from vinyl_catalog.entrypoints.http.error_responses import ErrorResponse
from vinyl_catalog.entrypoints.http.mappers.product_mapper import ProductMapper
from vinyl_catalog.use_cases.adjust_stock import AdjustStock, AdjustStockRequest
from vinyl_catalog.use_cases.create_product import CreateProduct, CreateProductRequest
from vinyl_catalog.use_cases.delete_product import DeleteProduct, DeleteProductRequest
from vinyl_catalog.use_cases.find_products_by_artist import (
    FindProductsByArtist,
    FindProductsByArtistRequest,
)
from vinyl_catalog.use_cases.find_products_by_genre import (
    FindProductsByGenre,
    FindProductsByGenreRequest,
)
from vinyl_catalog.use_cases.get_product_by_id import GetProductById, GetProductByIdRequest
from vinyl_catalog.use_cases.search_products import SearchProducts, SearchProductsRequest
from vinyl_catalog.use_cases.update_product import UpdateProduct, UpdateProductRequest


router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(require_principal)],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)


@router.post(
    "",
    response_model=ProductResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    responses={409: {"model": ErrorResponse, "description": "Title and artist already exist"}},
)
def create_product(
    payload: ProductCreateDTO,
    use_case: CreateProduct = Depends(get_create_product_use_case),
) -> ProductResponseDTO:
    request = CreateProductRequest(product=ProductMapper.to_new_product(payload))
    result = use_case.execute(request)
    return ProductMapper.to_product_response(result.product)


@router.get(
    "",
    response_model=ProductsPageResponseDTO,
    summary="List products",
    description="""
    List catalog products with optional filters, sorting and pagination.

    ## Filters
    - All filters use AND semantics
    - title/artist/genre: case-insensitive substring match
    - min_price/max_price, release_date_from/release_date_to: inclusive ranges
    - An inverted range returns an empty page, not an error

    ## Sorting
    - sort_by: price, title, artist, releaseDate, stock, createdAt (default title)
    - sort_order: asc or desc (default asc)

    ## Pagination
    - page starts at 1, default limit 10, max limit 100

    ## Example
    ```
    GET /v1/products?genre=rock&max_price=30.00&sort_by=price&sort_order=desc&page=2
    ```
    """,
)
def list_products(
    query: ProductsSearchQueryDTO = Depends(),
    use_case: SearchProducts = Depends(get_search_products_use_case),
) -> ProductsPageResponseDTO:
    """Follows the parse → execute → map → return pattern."""
    # 1. Map to domain request (rejects unknown sort keys)
    request = SearchProductsRequest(query=ProductMapper.to_domain_query(query))

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response
    return ProductMapper.to_page_response(result)


@router.get(
    "/by-artist/{artist}",
    response_model=list[ProductResponseDTO],
    summary="Find products by artist",
)
def find_by_artist(
    artist: str,
    use_case: FindProductsByArtist = Depends(get_find_by_artist_use_case),
) -> list[ProductResponseDTO]:
    result = use_case.execute(FindProductsByArtistRequest(artist=artist))
    return ProductMapper.to_product_list(result.products)


@router.get(
    "/by-genre/{genre}",
    response_model=list[ProductResponseDTO],
    summary="Find products by genre",
)
def find_by_genre(
    genre: str,
    use_case: FindProductsByGenre = Depends(get_find_by_genre_use_case),
) -> list[ProductResponseDTO]:
    result = use_case.execute(FindProductsByGenreRequest(genre=genre))
    return ProductMapper.to_product_list(result.products)


@router.get(
    "/{product_id}",
    response_model=ProductResponseDTO,
    summary="Get a product by id",
    responses={404: {"model": ErrorResponse, "description": "Product not found"}},
)
def get_product(
    product_id: int,
    use_case: GetProductById = Depends(get_get_product_by_id_use_case),
) -> ProductResponseDTO:
    result = use_case.execute(GetProductByIdRequest(product_id=product_id))
    return ProductMapper.to_product_response(result.product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponseDTO,
    summary="Update a product",
    responses={
        404: {"model": ErrorResponse, "description": "Product not found"},
        409: {"model": ErrorResponse, "description": "Title and artist already exist"},
    },
)
def update_product(
    product_id: int,
    payload: ProductUpdateDTO,
    use_case: UpdateProduct = Depends(get_update_product_use_case),
) -> ProductResponseDTO:
    request = UpdateProductRequest(product_id=product_id, changes=ProductMapper.to_changes(payload))
    result = use_case.execute(request)
    return ProductMapper.to_product_response(result.product)


@router.delete(
    "/{product_id}",
    response_model=ProductResponseDTO,
    summary="Delete a product",
    responses={404: {"model": ErrorResponse, "description": "Product not found"}},
)
def delete_product(
    product_id: int,
    use_case: DeleteProduct = Depends(get_delete_product_use_case),
) -> ProductResponseDTO:
    result = use_case.execute(DeleteProductRequest(product_id=product_id))
    return ProductMapper.to_product_response(result.product)


@router.patch(
    "/{product_id}/stock",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Adjust the stock of a product",
    description="""
    Apply a signed, non-zero delta to a product's stock.

    The resulting stock must stay within [0, 1000]; otherwise the request is
    rejected with 422 and the stock is left unchanged.
    """,
    responses={404: {"model": ErrorResponse, "description": "Product not found"}},
)
def adjust_stock(
    product_id: int,
    payload: StockAdjustmentDTO,
    use_case: AdjustStock = Depends(get_adjust_stock_use_case),
) -> Response:
    use_case.execute(AdjustStockRequest(product_id=product_id, quantity=payload.quantity))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
