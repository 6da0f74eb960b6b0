from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vinyl_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from vinyl_catalog.entrypoints.http.routes.health import router as health_router
from vinyl_catalog.entrypoints.http.routes.products import router as products_router
from vinyl_catalog.infra.db.session import dispose_engine
from vinyl_catalog.infra.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine()


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Vinyl Catalog API",
        description="""
        Inventory service for vinyl-record listings.

        ## Features
        - Create, read, update and delete products
        - List products with filters, sorting and pagination
        - Adjust stock with bounds checking (0 to 1000 units)

        ## Authentication
        Every /v1/products route requires an `Authorization: Bearer <token>` header.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router, prefix="/v1")

    return app


app = build_app()
