"""PostgreSQL implementation of ProductRepository."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vinyl_catalog.domain.product import (
    NewProduct,
    PageRequest,
    Product,
    ProductChanges,
    ProductFilters,
    ProductSort,
    SortField,
)
from vinyl_catalog.infra.db.models.product import ProductRow
from vinyl_catalog.ports.product_repository import (
    DuplicateProductError,
    ProductRepository,
    SearchResult,
    StockUpdate,
)

if TYPE_CHECKING:
    from sqlalchemy.sql import Select

_SORT_COLUMNS = {
    SortField.PRICE: ProductRow.price,
    SortField.TITLE: ProductRow.title,
    SortField.ARTIST: ProductRow.artist,
    SortField.RELEASE_DATE: ProductRow.release_date,
    SortField.STOCK: ProductRow.stock,
    SortField.CREATED_AT: ProductRow.created_at,
}

_TEXT_COLUMNS = {
    "title": ProductRow.title,
    "artist": ProductRow.artist,
    "genre": ProductRow.genre,
}


class PostgresProductRepository(ProductRepository):
    """
    PostgreSQL implementation of ProductRepository.

    - Uses SQLAlchemy ORM for database access
    - Applies filters using SQL WHERE clauses (ILIKE for text, inclusive ranges)
    - Returns total_count via COUNT(*) over the same filtered query
    - Adjusts stock with a single conditional UPDATE (bounded increment)
    - Converts ProductRow (infrastructure) to Product (domain)

    The SQL it emits is dialect-portable; tests run it against SQLite.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations (per request)
        """
        self._session = session

    def search(self, filters: ProductFilters, sort: ProductSort, paging: PageRequest) -> SearchResult:
        """
        Search products with filters, ordering and paging.

        Executes two queries on the same session and predicate set:
        1. COUNT(*) to get total matching products (before paging)
        2. SELECT with ORDER BY/OFFSET/LIMIT to get the page

        Note:
            Assumes inputs are validated by UseCase (contract programming).
        """
        query = self._build_query(filters)

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        column = _SORT_COLUMNS[sort.field]
        ordering = column.desc() if sort.descending else column.asc()
        query = (
            query.order_by(ordering.nulls_last(), ProductRow.id.asc())
            .offset(paging.offset)
            .limit(paging.limit)
        )

        rows = self._session.execute(query).scalars().all()
        products = [self._to_domain(row) for row in rows]

        return SearchResult(products=products, total_count=total_count)

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row else None

    def add(self, product: NewProduct) -> Product:
        row = ProductRow(
            title=product.title,
            artist=product.artist,
            genre=product.genre,
            release_date=product.release_date,
            price=product.price,
            stock=product.stock,
        )
        with self._unique_title_artist(product.title, product.artist):
            self._session.add(row)

        # Load server-side defaults (id, created_at, updated_at)
        self._session.refresh(row)
        return self._to_domain(row)

    def update(self, product_id: int, changes: ProductChanges) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        if row is None:
            return None

        values = changes.as_dict()
        title = values.get("title", row.title)
        artist = values.get("artist", row.artist)
        with self._unique_title_artist(title, artist):
            for name, value in values.items():
                setattr(row, name, value)

        self._session.refresh(row)
        return self._to_domain(row)

    def delete(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        if row is None:
            return None

        product = self._to_domain(row)
        self._session.delete(row)
        self._session.flush()
        return product

    def adjust_stock(
        self,
        product_id: int,
        quantity: int,
        minimum: int,
        maximum: int,
    ) -> StockUpdate | None:
        """
        Bounded increment under a row lock.

            SELECT stock FROM products WHERE id = :id FOR UPDATE
            UPDATE products SET stock = stock + :q
            WHERE id = :id AND stock + :q BETWEEN :min AND :max

        The lock is held until the unit of work ends, so concurrent
        adjustments of the same product queue behind each other and the
        stock reported for a refused delta is the one the bound was checked
        against.
        """
        current = self._session.execute(
            select(ProductRow.stock).where(ProductRow.id == product_id).with_for_update()
        ).scalar_one_or_none()

        if current is None:
            return None
        if not minimum <= current + quantity <= maximum:
            return StockUpdate(applied=False, stock=current)

        new_stock = ProductRow.stock + quantity
        statement = (
            update(ProductRow)
            .where(ProductRow.id == product_id)
            .where(new_stock >= minimum)
            .where(new_stock <= maximum)
            .values(stock=new_stock, updated_at=func.now())
            .execution_options(synchronize_session="fetch")
        )
        applied = self._session.execute(statement).rowcount == 1

        return StockUpdate(applied=applied, stock=current + quantity if applied else current)

    def find_by_artist(self, artist: str) -> list[Product]:
        query = (
            select(ProductRow)
            .where(ProductRow.artist.icontains(artist, autoescape=True))
            .order_by(ProductRow.title.asc(), ProductRow.id.asc())
        )
        return [self._to_domain(row) for row in self._session.execute(query).scalars().all()]

    def find_by_genre(self, genre: str) -> list[Product]:
        query = (
            select(ProductRow)
            .where(ProductRow.genre.icontains(genre, autoescape=True))
            .order_by(ProductRow.artist.asc(), ProductRow.id.asc())
        )
        return [self._to_domain(row) for row in self._session.execute(query).scalars().all()]

    @contextmanager
    def _unique_title_artist(self, title: str, artist: str) -> Iterator[None]:
        """
        Run a write inside a SAVEPOINT, translating a (title, artist) collision.

        Only the savepoint is rolled back on failure, so earlier work in the
        request transaction survives.
        """
        try:
            with self._session.begin_nested():
                yield
        except IntegrityError as exc:
            if self._title_artist_taken(title, artist):
                raise DuplicateProductError(title=title, artist=artist) from exc
            raise

    def _title_artist_taken(self, title: str, artist: str) -> bool:
        query = select(ProductRow.id).where(ProductRow.title == title, ProductRow.artist == artist)
        return self._session.execute(query).first() is not None

    def _build_query(self, filters: ProductFilters) -> Select[tuple[ProductRow]]:
        """
        Build SQLAlchemy query with filters applied.

        Every supplied filter adds one WHERE clause; clauses are AND-ed.
        No filters means no WHERE clause at all.
        """
        query = select(ProductRow)

        # Case-insensitive substring match; LIKE wildcards in the input are escaped
        for name, needle in filters.text_filters().items():
            query = query.where(_TEXT_COLUMNS[name].icontains(needle, autoescape=True))

        # Price range filters (inclusive)
        if filters.min_price is not None:
            query = query.where(ProductRow.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(ProductRow.price <= filters.max_price)

        # Release date range filters (inclusive)
        if filters.release_date_from is not None:
            query = query.where(ProductRow.release_date >= filters.release_date_from)
        if filters.release_date_to is not None:
            query = query.where(ProductRow.release_date <= filters.release_date_to)

        return query

    def _to_domain(self, row: ProductRow) -> Product:
        """Convert database model (ProductRow) to domain entity (Product)."""
        return Product(
            id=row.id,
            title=row.title,
            artist=row.artist,
            genre=row.genre,
            release_date=row.release_date,
            price=row.price,  # Already Decimal from NUMERIC column
            stock=row.stock,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
