"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    sku: String(required=True)
    name: String(required=True)
    category_id: Identifier(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """A product's descriptive fields, price, stock or flags were edited."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    is_active: Boolean(required=True)


@catalogue.event(part_of="Product")
class ProductActivationChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    is_active: Boolean(required=True)


@catalogue.event(part_of="Product")
class ProductReviewed:
    """A customer review was accepted and the rating aggregates recomputed."""

    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True)
    average_rating: Float(required=True)
    total_reviews: Integer(required=True)


@catalogue.event(part_of="Product")
class StockWithdrawn:
    """Units were taken from stock for an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    stock: Integer(required=True)


@catalogue.event(part_of="Product")
class StockRestored:
    """Units were returned to stock by a cancelled or failed order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    stock: Integer(required=True)
