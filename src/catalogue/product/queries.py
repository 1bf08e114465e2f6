"""Read-side queries over the product catalogue.

Listing filters are an explicit dataclass rather than a pass-through of query
parameters, so every supported predicate is spelled out here.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from shared.errors import NotFound, ValidationFailure
from shared.pagination import Page, fetch_all, paginate

# Upper bound (inclusive) for the "low stock" bucket in product statistics
LOW_STOCK_THRESHOLD = 10


class Availability(Enum):
    """Which products a listing includes."""

    IN_STOCK = "in_stock"  # active and stock > 0
    ALL = "all"
    INACTIVE = "inactive"


class FeaturedKind(Enum):
    MOST_ORDERED = "most-ordered"
    TOP_RATED = "top-rated"
    NEWEST = "newest"
    FEATURED = "featured"


_SORT_KEYS = {
    "created_at": lambda p: p.created_at,
    "price": lambda p: p.price,
    "name": lambda p: p.name.lower(),
    "average_rating": lambda p: p.average_rating,
    "total_orders": lambda p: p.total_orders,
}


@dataclass(frozen=True)
class ProductFilter:
    category_id: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None
    search: str | None = None
    availability: Availability = Availability.IN_STOCK
    sort: str = "-created_at"

    def matches(self, product: Product) -> bool:
        if self.availability is Availability.IN_STOCK and not (product.is_active and product.stock > 0):
            return False
        if self.availability is Availability.INACTIVE and product.is_active:
            return False
        if self.category_id and str(product.category_id) != self.category_id:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.min_rating is not None and product.average_rating < self.min_rating:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in product.name.lower() and needle not in product.description.lower():
                return False
        return True

    def sort_key(self):
        """``(key function, reverse)`` for the ``sort`` setting, e.g. ``"-price"``."""
        field_name = self.sort.lstrip("-")
        if field_name not in _SORT_KEYS:
            raise ValidationFailure(
                f"Unsupported sort key {self.sort!r}",
                {"sort": [f"Must be one of {sorted(_SORT_KEYS)}, optionally prefixed with '-'"]},
            )
        return _SORT_KEYS[field_name], self.sort.startswith("-")


def _all_products() -> list[Product]:
    return fetch_all(current_domain.repository_for(Product))


def list_products(product_filter: ProductFilter, page: int = 1, limit: int = 12) -> Page:
    key, reverse = product_filter.sort_key()
    products = [p for p in _all_products() if product_filter.matches(p)]
    products.sort(key=key, reverse=reverse)
    return paginate(products, page, limit)


def featured_products(kind: FeaturedKind = FeaturedKind.MOST_ORDERED, limit: int = 8) -> list[Product]:
    """Storefront highlights. Only active, in-stock products qualify."""
    products = [p for p in _all_products() if p.is_active and p.stock > 0]

    if kind is FeaturedKind.MOST_ORDERED:
        products.sort(key=lambda p: p.total_orders, reverse=True)
    elif kind is FeaturedKind.TOP_RATED:
        products = [p for p in products if p.average_rating >= 4]
        products.sort(key=lambda p: (p.average_rating, p.total_reviews), reverse=True)
    elif kind is FeaturedKind.NEWEST:
        products.sort(key=lambda p: p.created_at, reverse=True)
    else:
        products = [p for p in products if p.is_featured]

    return products[:limit]


def get_product(id_or_slug: str) -> Product:
    repo = current_domain.repository_for(Product)
    try:
        return repo.get(id_or_slug)
    except ObjectNotFoundError:
        pass

    for product in fetch_all(repo):
        if product.slug == id_or_slug:
            return product
    raise NotFound("Product not found")


def product_statistics() -> dict:
    products = _all_products()
    return {
        "total_products": len(products),
        "active_products": sum(1 for p in products if p.is_active),
        "out_of_stock": sum(1 for p in products if p.stock == 0),
        "low_stock": sum(1 for p in products if 0 < p.stock <= LOW_STOCK_THRESHOLD),
    }
