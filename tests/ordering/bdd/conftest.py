"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import OrderStatus
from ordering.order.ports import Requester
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    """Container for the order produced by a step, or the error it raised."""
    return {"order": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the product "{name}" priced at {price:f} with {stock:d} in stock'))
def _(products, name, price, stock):
    products.put(name, name=name, price=price, stock=stock)


@given(parsers.cfparse('the product "{name}" is retired'))
def _(products, name):
    products.put(name, name=name, price=products.find_product(name).price, stock=products.stock_of(name), is_active=False)


@given(parsers.cfparse('customer "{user_id}" placed an order for {quantity:d} of "{name}"'))
def _(workflow, address, outcome, user_id, quantity, name):
    outcome["order"] = workflow.place_order(user_id, [{"product_id": name, "quantity": quantity}], address, "credit_card")


@given(parsers.cfparse('the order was marked "{status}"'))
def _(workflow, outcome, status):
    workflow.update_order_status(str(outcome["order"].id), order_status=status)


@given(parsers.cfparse('"{user_id}" cancelled the order'))
def _(workflow, outcome, user_id):
    workflow.cancel_order(str(outcome["order"].id), Requester(user_id=user_id))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is pending")
def _(outcome):
    assert outcome["error"] is None
    assert outcome["order"].order_status == OrderStatus.PENDING.value


@then("the order is cancelled")
def _(outcome):
    assert outcome["error"] is None
    assert outcome["order"].order_status == OrderStatus.CANCELLED.value


@then(parsers.cfparse("the order {part} is {amount:f}"))
def _(outcome, part, amount):
    field = {"subtotal": "subtotal", "shipping": "shipping_cost", "tax": "tax", "total": "total"}[part]
    assert getattr(outcome["order"], field) == pytest.approx(amount)


@then(parsers.cfparse('the order is rejected as "{kind}"'))
def _(outcome, kind):
    assert outcome["error"] is not None
    assert outcome["error"].kind == kind


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _(products, name, stock):
    assert products.stock_of(name) == stock
