"""Order aggregate (CQRS): an immutable purchase snapshot with a status lifecycle.

Line items, prices and totals are frozen when the order is placed. After that
the only changes are status transitions:

    pending ⇄ processing ⇄ shipped ⇄ delivered   (administrative, permissive)
    pending | processing → cancelled             (cancel only; terminal)

Amounts are stored as floats rounded to cents; they are computed with
``Decimal`` in ``ordering.order.pricing``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from shared.errors import InvalidState


def _now():
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    CASH_ON_DELIVERY = "cash_on_delivery"


CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING.value, OrderStatus.PROCESSING.value})


# ---------------------------------------------------------------------------
# Value Objects & Entities
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@ordering.entity(part_of="Order")
class OrderItem:
    """A purchased product line. Name, image and price are copied from the
    catalogue at placement time and never change afterwards."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    line_total = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=40)
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    subtotal = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0, min_value=0.0)
    notes = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_is_sum_of_parts(self):
        if abs(self.total - (self.subtotal + self.tax + self.shipping_cost)) > 0.005:
            raise ValidationError({"total": ["Total must equal subtotal + tax + shipping"]})

    @classmethod
    def place(
        cls,
        order_number: str,
        user_id: str,
        items: list[OrderItem],
        shipping_address: ShippingAddress,
        payment_method: str,
        subtotal: float,
        tax: float,
        shipping_cost: float,
        total: float,
        payment_status: str = PaymentStatus.PENDING.value,
        notes: str | None = None,
    ):
        """Create a new pending order from priced line items."""
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})
        if abs(sum(item.line_total for item in items) - subtotal) > 0.005:
            raise ValidationError({"subtotal": ["Subtotal must equal the sum of line totals"]})

        now = _now()
        order = cls(
            order_number=order_number,
            user_id=user_id,
            shipping_address=shipping_address,
            payment_method=payment_method,
            payment_status=payment_status,
            order_status=OrderStatus.PENDING.value,
            subtotal=subtotal,
            tax=tax,
            shipping_cost=shipping_cost,
            total=total,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                item_count=sum(item.quantity for item in items),
                total=total,
                payment_status=payment_status,
                placed_at=now,
            )
        )
        return order

    @property
    def is_cancellable(self) -> bool:
        return self.order_status in CANCELLABLE_STATUSES

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def cancel(self) -> None:
        """Mark the order cancelled. Stock restoration is the workflow's job."""
        if not self.is_cancellable:
            raise InvalidState(f"Cannot cancel order in {self.order_status} status")

        now = _now()
        self.order_status = OrderStatus.CANCELLED.value
        self.payment_status = PaymentStatus.FAILED.value
        self.updated_at = now
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                cancelled_at=now,
            )
        )

    def change_status(self, order_status: str | None = None, payment_status: str | None = None) -> None:
        """Administrative status edit.

        Any non-cancelled status may move to any other non-cancelled status.
        Cancellation is only reachable through ``cancel`` so that stock gets
        restored, and a cancelled order stays cancelled.
        """
        if self.order_status == OrderStatus.CANCELLED.value:
            raise InvalidState("Cancelled orders cannot change status")
        if order_status == OrderStatus.CANCELLED.value:
            raise InvalidState("Use order cancellation to cancel an order")

        previous_order_status = self.order_status
        previous_payment_status = self.payment_status
        if order_status is not None:
            self.order_status = order_status
        if payment_status is not None:
            self.payment_status = payment_status
        self.updated_at = _now()

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_order_status=previous_order_status,
                order_status=self.order_status,
                previous_payment_status=previous_payment_status,
                payment_status=self.payment_status,
                changed_at=self.updated_at,
            )
        )
