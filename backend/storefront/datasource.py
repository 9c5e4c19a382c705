"""
Catalog data sources.

The catalog read routes depend on a CatalogSource, chosen by
settings.CATALOG_SOURCE:

- "database": products come from SQL through the crud layer
- "demo": the fixed demo catalog from storefront.seed, held in memory

A failing database is reported as an error; it never silently switches
to demo data.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront import crud, schemas
from storefront.seed import DEMO_PRODUCTS

# filter field -> (category, specs attribute)
SPEC_FILTERS = {
    "gpu_chipset": ("gpu", "chipset"),
    "cpu_socket": ("cpu", "socket"),
    "ram_capacity": ("ram", "capacity"),
    "ram_type": ("ram", "type"),
    "ssd_interface": ("ssd", "interface"),
    "motherboard_form_factor": ("motherboard", "form_factor"),
}


class CatalogSource(ABC):
    name = "abstract"

    @abstractmethod
    def list_products(self, filters: Optional[schemas.ProductFilters] = None) -> List[schemas.Product]:
        ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[schemas.Product]:
        ...


class DatabaseCatalogSource(CatalogSource):
    name = "database"

    def __init__(self, db: Session):
        self.db = db

    def list_products(self, filters=None):
        return [schemas.Product.model_validate(p) for p in crud.get_products(self.db, filters)]

    def get_product(self, product_id):
        product = crud.get_product(self.db, product_id)
        if product is None:
            return None
        return schemas.Product.model_validate(product)


def matches(product: schemas.Product, filters: schemas.ProductFilters) -> bool:
    """Apply ProductFilters in memory with the same semantics as crud.get_products."""
    if filters.category is not None and product.category != filters.category:
        return False
    if filters.brand and product.brand != filters.brand:
        return False
    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:
        return False
    if filters.in_stock_only and product.stock_quantity < 1:
        return False

    for field, (category, attribute) in SPEC_FILTERS.items():
        wanted = getattr(filters, field)
        if wanted is None or wanted == "":
            continue
        # Columns of other categories are NULL, so they never match
        if product.specs.category != category:
            return False
        if getattr(product.specs, attribute) != wanted:
            return False

    return True


class DemoCatalogSource(CatalogSource):
    name = "demo"

    def __init__(self, products: Optional[List[dict]] = None):
        now = datetime.now(timezone.utc)
        self.products = [
            schemas.Product.model_validate({
                "id": index,
                "category": raw["specs"]["category"],
                "is_active": True,
                "description": None,
                "created_at": now,
                "updated_at": now,
                **raw,
            })
            for index, raw in enumerate(products if products is not None else DEMO_PRODUCTS, start=1)
        ]

    def list_products(self, filters=None):
        if filters is None:
            return list(self.products)
        return [p for p in self.products if matches(p, filters)]

    def get_product(self, product_id):
        for product in self.products:
            if product.id == product_id:
                return product
        return None


def build_catalog_source(kind: str, db: Session) -> CatalogSource:
    if kind == "demo":
        return DemoCatalogSource()
    if kind == "database":
        return DatabaseCatalogSource(db)
    raise ValueError(f"Unknown catalog source: {kind!r}")
