from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

DECIMAL_PATTERN = r"^\d+(\.\d{1,2})?$"
PRICE_BOUND_PATTERN = r"^\d+(\.\d+)?$"


class ProductResponseDTO(BaseModel):
    id: int
    title: str
    artist: str
    genre: str | None
    release_date: date | None
    price: str
    stock: int
    created_at: datetime | None
    updated_at: datetime | None


class ProductCreateDTO(BaseModel):
    """Payload for adding a vinyl record to the catalog."""

    title: str = Field(description="Title of the vinyl record", examples=["Black Album"])
    artist: str = Field(description="Artist or band name", examples=["Metallica"])
    genre: str | None = Field(default=None, description="Musical genre", examples=["Metal"])
    release_date: date | None = Field(
        default=None,
        description="Release date (ISO 8601)",
        examples=["1991-08-12"],
    )
    price: str = Field(
        description="Price as decimal string, must be > 0",
        examples=["29.99"],
        pattern=DECIMAL_PATTERN,
    )
    stock: int = Field(default=0, description="Initial stock, must be >= 0", examples=[10])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Black Album",
                "artist": "Metallica",
                "genre": "Metal",
                "release_date": "1991-08-12",
                "price": "29.99",
                "stock": 10,
            }
        }
    )


class ProductUpdateDTO(BaseModel):
    """Partial update; omitted fields are left untouched."""

    title: str | None = None
    artist: str | None = None
    genre: str | None = None
    release_date: date | None = None
    price: str | None = Field(default=None, pattern=DECIMAL_PATTERN, examples=["24.99"])
    stock: int | None = None

    model_config = ConfigDict(json_schema_extra={"example": {"price": "24.99", "stock": 5}})


class StockAdjustmentDTO(BaseModel):
    """Signed stock delta. Positive adds units, negative removes them."""

    quantity: int | None = Field(
        default=None,
        description="Non-zero delta; resulting stock must stay within [0, 1000]",
        examples=[5, -3],
    )


class ProductsSearchQueryDTO(BaseModel):
    """Query parameters for listing products."""

    page: int = Field(default=1, description="Page number (1-based)", examples=[1], ge=1)
    limit: int = Field(
        default=10,
        description="Items per page",
        examples=[10],
        ge=1,
        le=100,
    )
    title: str | None = Field(
        default=None,
        description="Filter by title (case-insensitive substring)",
        examples=["Black Album"],
    )
    artist: str | None = Field(
        default=None,
        description="Filter by artist (case-insensitive substring)",
        examples=["Metallica"],
    )
    genre: str | None = Field(
        default=None,
        description="Filter by genre (case-insensitive substring)",
        examples=["Rock"],
    )
    min_price: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["10.99"],
        pattern=PRICE_BOUND_PATTERN,
    )
    max_price: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["49.99"],
        pattern=PRICE_BOUND_PATTERN,
    )
    release_date_from: date | None = Field(
        default=None,
        description="Earliest release date (inclusive)",
        examples=["1991-01-01"],
    )
    release_date_to: date | None = Field(
        default=None,
        description="Latest release date (inclusive)",
        examples=["1991-12-31"],
    )
    sort_by: str | None = Field(
        default=None,
        description="One of: price, title, artist, releaseDate, stock, createdAt (default title)",
        examples=["price"],
    )
    sort_order: str | None = Field(
        default=None,
        description="asc or desc (default asc)",
        examples=["desc"],
    )


class PageMetaDTO(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class ProductsPageResponseDTO(BaseModel):
    items: list[ProductResponseDTO]
    meta: PageMetaDTO
