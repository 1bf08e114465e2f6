"""Order pricing: line totals, tax and shipping in exact decimal arithmetic."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from shared.settings import Settings

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Round to cents, half-up. Floats go through ``str`` to avoid binary noise."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal


@dataclass(frozen=True)
class PricingPolicy:
    """Tax is a flat rate on the subtotal. Shipping is free strictly above the
    threshold and a flat fee otherwise."""

    tax_rate: Decimal = Decimal("0.18")
    free_shipping_threshold: Decimal = Decimal("500")
    flat_shipping_cost: Decimal = Decimal("50")

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingPolicy":
        return cls(
            tax_rate=Decimal(str(settings.tax_rate)),
            free_shipping_threshold=Decimal(str(settings.free_shipping_threshold)),
            flat_shipping_cost=to_money(settings.flat_shipping_cost),
        )

    def line_total(self, unit_price, quantity: int) -> Decimal:
        return to_money(to_money(unit_price) * quantity)

    def shipping_for(self, subtotal: Decimal) -> Decimal:
        return ZERO if subtotal > self.free_shipping_threshold else self.flat_shipping_cost

    def totals(self, line_totals: Iterable[Decimal]) -> OrderTotals:
        subtotal = sum(line_totals, ZERO)
        tax = to_money(subtotal * self.tax_rate)
        shipping_cost = self.shipping_for(subtotal)
        return OrderTotals(
            subtotal=subtotal,
            tax=tax,
            shipping_cost=shipping_cost,
            total=subtotal + tax + shipping_cost,
        )
