from vinyl_catalog.infra.db.models.base import Base
from vinyl_catalog.infra.db.models.product import ProductRow

__all__ = ["Base", "ProductRow"]
