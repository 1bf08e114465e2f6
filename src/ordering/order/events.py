"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was accepted, stock withdrawn and payment settled."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    payment_status = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order or payment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_order_status = String(required=True)
    order_status = String(required=True)
    previous_payment_status = String(required=True)
    payment_status = String(required=True)
    changed_at = DateTime(required=True)
