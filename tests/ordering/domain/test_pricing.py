"""Tests for order pricing."""

from decimal import Decimal

import pytest
from ordering.order.pricing import PricingPolicy, to_money
from shared.settings import Settings


@pytest.fixture
def policy():
    return PricingPolicy.from_settings(Settings())


def test_free_shipping_above_threshold(policy):
    totals = policy.totals([policy.line_total(300, 2)])
    assert totals.subtotal == Decimal("600.00")
    assert totals.shipping_cost == Decimal("0.00")
    assert totals.tax == Decimal("108.00")
    assert totals.total == Decimal("708.00")


def test_flat_shipping_below_threshold(policy):
    totals = policy.totals([policy.line_total(100, 1)])
    assert totals.subtotal == Decimal("100.00")
    assert totals.shipping_cost == Decimal("50.00")
    assert totals.tax == Decimal("18.00")
    assert totals.total == Decimal("168.00")


def test_threshold_itself_still_pays_shipping(policy):
    assert policy.shipping_for(Decimal("500.00")) == Decimal("50.00")
    assert policy.shipping_for(Decimal("500.01")) == Decimal("0.00")


def test_line_totals_are_exact(policy):
    assert policy.line_total(0.1, 3) == Decimal("0.30")
    assert policy.line_total(19.99, 3) == Decimal("59.97")


def test_tax_rounds_half_up(policy):
    # 0.18 * 12.25 = 2.205
    assert policy.totals([Decimal("12.25")]).tax == Decimal("2.21")


def test_to_money():
    assert to_money(2.675) == Decimal("2.68")
    assert to_money("10") == Decimal("10.00")


def test_settings_drive_the_policy():
    policy = PricingPolicy.from_settings(Settings(tax_rate=0.1, free_shipping_threshold=50, flat_shipping_cost=7.5))
    totals = policy.totals([Decimal("40.00")])
    assert totals.tax == Decimal("4.00")
    assert totals.shipping_cost == Decimal("7.50")
    assert totals.total == Decimal("51.50")
