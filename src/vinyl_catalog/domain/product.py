from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from vinyl_catalog.domain.errors import ValidationError


STOCK_MIN = 0
STOCK_MAX = 1000

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class PagingValidationError(ValidationError):
    """Raised when page or limit are outside their domain."""

    pass


class FilterValidationError(ValidationError):
    """Raised when filter bounds are malformed."""

    pass


class SortValidationError(ValidationError):
    """Raised when sort_by or sort_order is not in the whitelist."""

    pass


class ProductValidationError(ValidationError):
    """Raised when product fields break an entity invariant."""

    pass


def _field_error(name: str, message: str, code: str) -> dict[str, str]:
    return {"field": name, "message": message, "code": code}


def validate_product_id(product_id: object, name: str = "product_id") -> int:
    """
    Ensure an id is a positive integer.

    Raises:
        ValidationError: If the id is not an int (bools excluded) or is <= 0
    """
    if isinstance(product_id, bool) or not isinstance(product_id, int) or product_id <= 0:
        raise ValidationError.for_field(
            name,
            "ID must be a positive number",
            "INVALID_ID",
        )
    return product_id


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


# ==============================================================================
# Entities
# ==============================================================================


@dataclass(frozen=True)
class Product:
    id: int
    title: str
    artist: str
    price: Decimal
    stock: int
    genre: str | None = None
    release_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class NewProduct:
    title: str
    artist: str
    price: Decimal
    stock: int = 0
    genre: str | None = None
    release_date: date | None = None

    def validate(self) -> None:
        """
        Validate creation invariants.

        Raises:
            ProductValidationError: If title/artist are blank, price <= 0 or stock < 0
        """
        errors: list[dict[str, str]] = []

        if _is_blank(self.title):
            errors.append(_field_error("title", "Title cannot be empty", "EMPTY"))
        if _is_blank(self.artist):
            errors.append(_field_error("artist", "Artist cannot be empty", "EMPTY"))
        if not isinstance(self.price, Decimal):
            errors.append(
                _field_error("price", "Price must be Decimal (no floats past the boundary)", "INVALID_TYPE")
            )
        elif self.price <= 0:
            errors.append(_field_error("price", "Price must be greater than 0", "NOT_POSITIVE"))
        if self.stock < STOCK_MIN:
            errors.append(_field_error("stock", "Initial stock cannot be negative", "NEGATIVE_STOCK"))

        if errors:
            raise ProductValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class ProductChanges:
    """Partial update. None means the field was not supplied."""

    title: str | None = None
    artist: str | None = None
    genre: str | None = None
    release_date: date | None = None
    price: Decimal | None = None
    stock: int | None = None

    def validate(self) -> None:
        """
        Re-validate supplied fields against the creation invariants.

        Raises:
            ProductValidationError: If a supplied field breaks an invariant
        """
        errors: list[dict[str, str]] = []

        if self.title is not None and _is_blank(self.title):
            errors.append(_field_error("title", "Title cannot be empty", "EMPTY"))
        if self.artist is not None and _is_blank(self.artist):
            errors.append(_field_error("artist", "Artist cannot be empty", "EMPTY"))
        if self.price is not None and self.price <= 0:
            errors.append(_field_error("price", "Price must be greater than 0", "NOT_POSITIVE"))
        if self.stock is not None and self.stock < STOCK_MIN:
            errors.append(_field_error("stock", "Stock cannot be negative", "NEGATIVE_STOCK"))

        if errors:
            raise ProductValidationError(errors=errors)

    def as_dict(self) -> dict[str, object]:
        """Supplied fields only."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.as_dict()


# ==============================================================================
# Query specification
# ==============================================================================


class SortField(str, Enum):
    PRICE = "price"
    TITLE = "title"
    ARTIST = "artist"
    RELEASE_DATE = "releaseDate"
    STOCK = "stock"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class ProductSort:
    field: SortField = SortField.TITLE
    order: SortOrder = SortOrder.ASC

    @property
    def descending(self) -> bool:
        return self.order is SortOrder.DESC

    @classmethod
    def parse(cls, sort_by: str | None, sort_order: str | None) -> ProductSort:
        """
        Build a sort from raw text, applying defaults for missing values.

        Unknown keys are rejected, never silently replaced by the default.

        Raises:
            SortValidationError: If sort_by or sort_order is outside the whitelist
        """
        errors: list[dict[str, str]] = []
        sort_field = SortField.TITLE
        order = SortOrder.ASC

        if sort_by is not None:
            try:
                sort_field = SortField(sort_by)
            except ValueError:
                allowed = ", ".join(f.value for f in SortField)
                errors.append(
                    _field_error("sort_by", f"Must be one of: {allowed}", "INVALID_SORT_FIELD")
                )

        if sort_order is not None:
            try:
                order = SortOrder(sort_order.lower())
            except ValueError:
                errors.append(_field_error("sort_order", "Must be one of: asc, desc", "INVALID_SORT_ORDER"))

        if errors:
            raise SortValidationError(errors=errors)

        return cls(field=sort_field, order=order)


@dataclass(frozen=True, slots=True)
class ProductFilters:
    """
    Closed set of optional filters, combined with AND semantics.

    Text filters are case-insensitive substring matches. Range bounds are
    inclusive and independent: an inverted range is allowed and matches nothing.
    """

    title: str | None = None
    artist: str | None = None
    genre: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    release_date_from: date | None = None
    release_date_to: date | None = None

    def validate(self) -> None:
        """
        Validate filter parameters.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        errors: list[dict[str, str]] = []

        for name in ("min_price", "max_price"):
            value = getattr(self, name)
            if value is None:
                continue
            # Guardrail: prevent float leakage past boundary
            if not isinstance(value, Decimal):
                errors.append(
                    _field_error(name, "Must be Decimal or None (no floats past the boundary)", "INVALID_TYPE")
                )
            elif not value.is_finite() or value < 0:
                errors.append(_field_error(name, "Must be >= 0", "OUT_OF_RANGE"))

        for name in ("release_date_from", "release_date_to"):
            value = getattr(self, name)
            # datetime is a date subclass; only calendar dates are accepted
            if value is not None and (not isinstance(value, date) or isinstance(value, datetime)):
                errors.append(_field_error(name, "Must be a calendar date", "INVALID_DATE"))

        if errors:
            raise FilterValidationError(errors=errors)

    def text_filters(self) -> dict[str, str]:
        """Supplied, non-blank text filters keyed by product field."""
        candidates = {"title": self.title, "artist": self.artist, "genre": self.genre}
        return {name: value for name, value in candidates.items() if not _is_blank(value)}


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        errors: list[dict[str, str]] = []

        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
            errors.append(_field_error("page", "page must be >= 1", "OUT_OF_RANGE"))
        if (
            isinstance(self.limit, bool)
            or not isinstance(self.limit, int)
            or not 1 <= self.limit <= MAX_LIMIT
        ):
            errors.append(_field_error("limit", f"limit must be between 1 and {MAX_LIMIT}", "OUT_OF_RANGE"))

        if errors:
            raise PagingValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class ProductQuery:
    """Per-request query specification; built, validated and consumed once."""

    filters: ProductFilters = field(default_factory=ProductFilters)
    sort: ProductSort = field(default_factory=ProductSort)
    paging: PageRequest = field(default_factory=PageRequest)

    def validate(self) -> None:
        self.paging.validate()
        self.filters.validate()


@dataclass(frozen=True, slots=True)
class PageMeta:
    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, total: int, paging: PageRequest) -> PageMeta:
        total_pages = -(-total // paging.limit)  # ceil without floats; 0 when total is 0
        return cls(
            total=total,
            page=paging.page,
            limit=paging.limit,
            total_pages=total_pages,
            has_next_page=paging.page < total_pages,
            has_previous_page=paging.page > 1,
        )


# ==============================================================================
# Stock
# ==============================================================================


@dataclass(frozen=True, slots=True)
class StockAdjustment:
    product_id: int
    quantity: int | None

    def validate(self) -> None:
        """
        Validate the delta request itself (bounds are checked by storage).

        Raises:
            ValidationError: If the id is not positive, or quantity is missing, non-integer or zero
        """
        validate_product_id(self.product_id)

        if self.quantity is None:
            raise ValidationError.for_field(
                "quantity", "Quantity is required to update the stock", "REQUIRED"
            )
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError.for_field("quantity", "Quantity must be an integer", "INVALID_TYPE")
        if self.quantity == 0:
            raise ValidationError.for_field("quantity", "Quantity cannot be zero", "ZERO_QUANTITY")
