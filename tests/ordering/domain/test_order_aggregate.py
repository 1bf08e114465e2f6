"""Tests for the Order aggregate: placement, cancellation and status edits."""

import pytest
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.order import Order, OrderItem, OrderStatus, PaymentStatus, ShippingAddress
from protean.exceptions import ValidationError
from shared.errors import InvalidState


def _address():
    return ShippingAddress(street="1 Main St", city="Springfield", state="IL", zip_code="62701", country="US")


def _items():
    return [
        OrderItem(product_id="p-1", name="Espresso Machine", quantity=2, price=300.0, line_total=600.0),
        OrderItem(product_id="p-2", name="Filter Papers", quantity=1, price=5.5, line_total=5.5),
    ]


def _place(**overrides):
    params = {
        "order_number": "ORD-ABC123-XYZ12",
        "user_id": "user-1",
        "items": _items(),
        "shipping_address": _address(),
        "payment_method": "credit_card",
        "subtotal": 605.5,
        "tax": 108.99,
        "shipping_cost": 0.0,
        "total": 714.49,
        "payment_status": PaymentStatus.PAID.value,
    }
    params.update(overrides)
    return Order.place(**params)


class TestPlacement:
    def test_new_order_is_pending(self):
        order = _place()
        assert order.order_status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PAID.value
        assert len(order.items) == 2
        assert order.created_at is not None

    def test_raises_order_placed(self):
        event = _place()._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 3
        assert event.total == 714.49

    def test_requires_items(self):
        with pytest.raises(ValidationError):
            _place(items=[])

    def test_subtotal_must_match_lines(self):
        with pytest.raises(ValidationError) as exc:
            _place(subtotal=600.0, total=708.99)
        assert "subtotal" in exc.value.messages

    def test_total_must_be_sum_of_parts(self):
        with pytest.raises(ValidationError) as exc:
            _place(total=700.0)
        assert "total" in exc.value.messages

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError):
            _place(payment_method="barter")

    def test_shipping_address_fields_required(self):
        with pytest.raises(ValidationError):
            ShippingAddress(street="1 Main St", city="Springfield", state="IL", country="US")

    def test_item_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="p-1", name="Mug", quantity=0, price=5.0, line_total=0.0)

    def test_ownership(self):
        order = _place()
        assert order.is_owned_by("user-1")
        assert not order.is_owned_by("user-2")


class TestCancel:
    @pytest.mark.parametrize("status", [OrderStatus.PENDING.value, OrderStatus.PROCESSING.value])
    def test_cancellable_statuses(self, status):
        order = _place()
        order.order_status = status
        order.cancel()
        assert order.order_status == OrderStatus.CANCELLED.value
        assert order.payment_status == PaymentStatus.FAILED.value
        assert isinstance(order._events[-1], OrderCancelled)

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value],
    )
    def test_other_statuses_cannot_cancel(self, status):
        order = _place()
        order.order_status = status
        with pytest.raises(InvalidState):
            order.cancel()
        assert order.order_status == status


class TestChangeStatus:
    def test_moves_between_non_cancelled_statuses(self):
        order = _place()
        order.change_status(order_status=OrderStatus.DELIVERED.value)
        order.change_status(order_status=OrderStatus.PROCESSING.value, payment_status=PaymentStatus.PENDING.value)
        assert order.order_status == OrderStatus.PROCESSING.value
        assert order.payment_status == PaymentStatus.PENDING.value

        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_order_status == OrderStatus.DELIVERED.value

    def test_payment_only_change(self):
        order = _place(payment_status=PaymentStatus.PENDING.value)
        order.change_status(payment_status=PaymentStatus.PAID.value)
        assert order.order_status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PAID.value

    def test_setting_cancelled_is_rejected(self):
        order = _place()
        with pytest.raises(InvalidState):
            order.change_status(order_status=OrderStatus.CANCELLED.value)
        assert order.order_status == OrderStatus.PENDING.value

    def test_cancelled_is_terminal(self):
        order = _place()
        order.cancel()
        with pytest.raises(InvalidState):
            order.change_status(order_status=OrderStatus.PENDING.value)
