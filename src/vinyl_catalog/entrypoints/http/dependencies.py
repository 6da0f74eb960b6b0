"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons (the authenticator) use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from vinyl_catalog.adapters.postgres_product_repository import PostgresProductRepository
from vinyl_catalog.adapters.static_token_authenticator import StaticTokenAuthenticator
from vinyl_catalog.domain.errors import UnauthorizedError
from vinyl_catalog.infra.auth.config import api_tokens
from vinyl_catalog.infra.db.session import get_session
from vinyl_catalog.ports.authenticator import Authenticator, Principal
from vinyl_catalog.ports.product_repository import ProductRepository
from vinyl_catalog.use_cases.adjust_stock import AdjustStock
from vinyl_catalog.use_cases.create_product import CreateProduct
from vinyl_catalog.use_cases.delete_product import DeleteProduct
from vinyl_catalog.use_cases.find_products_by_artist import FindProductsByArtist
from vinyl_catalog.use_cases.find_products_by_genre import FindProductsByGenre
from vinyl_catalog.use_cases.get_product_by_id import GetProductById
from vinyl_catalog.use_cases.search_products import SearchProducts
from vinyl_catalog.use_cases.update_product import UpdateProduct

bearer_scheme = HTTPBearer(auto_error=False, description="API bearer token")


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() context manager commits on success,
    rolls back on exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return PostgresProductRepository(session=db)


@lru_cache(maxsize=1)
def get_authenticator() -> Authenticator:
    """Stateless singleton built from API_TOKENS."""
    return StaticTokenAuthenticator(api_tokens())


def require_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Principal:
    """
    Gate for catalog routes: resolves the bearer token to a principal.

    Raises:
        UnauthorizedError: If the header is missing, not a bearer token, or the token is unknown
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    return authenticator.authenticate(credentials.credentials)


def get_search_products_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> SearchProducts:
    return SearchProducts(product_repository=repository)


def get_get_product_by_id_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> GetProductById:
    return GetProductById(product_repository=repository)


def get_create_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> CreateProduct:
    return CreateProduct(product_repository=repository)


def get_update_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> UpdateProduct:
    return UpdateProduct(product_repository=repository)


def get_delete_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> DeleteProduct:
    return DeleteProduct(product_repository=repository)


def get_adjust_stock_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> AdjustStock:
    return AdjustStock(product_repository=repository)


def get_find_by_artist_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> FindProductsByArtist:
    return FindProductsByArtist(product_repository=repository)


def get_find_by_genre_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> FindProductsByGenre:
    return FindProductsByGenre(product_repository=repository)
