"""Order listing filters and reporting over sets of orders.

These functions work on plain lists of ``Order`` so they behave the same over
the repository-backed store and the in-memory one used in tests.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.order.pricing import ZERO, to_money

RECENT_ORDERS_IN_STATISTICS = 5
RECENT_ORDERS_IN_CUSTOMER_SUMMARY = 10
SALES_TREND_DAYS = 7


@dataclass(frozen=True)
class OrderFilter:
    """Supported order listing predicates. Unset fields match everything.

    ``search`` matches the order number or the shipping city,
    case-insensitively.
    """

    user_id: str | None = None
    status: str | None = None
    search: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None

    def matches(self, order: Order) -> bool:
        if self.user_id is not None and str(order.user_id) != str(self.user_id):
            return False
        if self.status is not None and order.order_status != self.status:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in order.order_number.lower() and needle not in order.shipping_address.city.lower():
                return False
        if self.created_from is not None and order.created_at < self.created_from:
            return False
        if self.created_to is not None and order.created_at > self.created_to:
            return False
        return True


def newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def counts_towards_sales(order: Order) -> bool:
    return order.payment_status == PaymentStatus.PAID.value and order.order_status != OrderStatus.CANCELLED.value


def _sales_total(orders) -> float:
    return float(sum((to_money(o.total) for o in orders if counts_towards_sales(o)), ZERO))


def order_statistics(orders: list[Order], now: datetime | None = None) -> dict:
    """Dashboard figures: status counts, paid sales, recent orders and a 7-day trend."""
    now = now or datetime.now(UTC)
    by_status = Counter(o.order_status for o in orders)

    window_start = now - timedelta(days=SALES_TREND_DAYS)
    trend = defaultdict(lambda: {"sales": ZERO, "orders": 0})
    for order in orders:
        if order.created_at >= window_start and counts_towards_sales(order):
            day = order.created_at.date().isoformat()
            trend[day]["sales"] += to_money(order.total)
            trend[day]["orders"] += 1

    return {
        "total_orders": len(orders),
        "pending_orders": by_status[OrderStatus.PENDING.value],
        "processing_orders": by_status[OrderStatus.PROCESSING.value],
        "delivered_orders": by_status[OrderStatus.DELIVERED.value],
        "cancelled_orders": by_status[OrderStatus.CANCELLED.value],
        "total_sales": _sales_total(orders),
        "recent_orders": newest_first(orders)[:RECENT_ORDERS_IN_STATISTICS],
        "status_distribution": [{"status": status, "count": count} for status, count in sorted(by_status.items())],
        "sales_trend": [
            {"date": day, "sales": float(bucket["sales"]), "orders": bucket["orders"]}
            for day, bucket in sorted(trend.items())
        ],
    }


def customer_summary(orders: list[Order]) -> dict:
    """Order history figures for one customer's orders."""
    return {
        "total_orders": len(orders),
        "total_spent": _sales_total(orders),
        "recent_orders": newest_first(orders)[:RECENT_ORDERS_IN_CUSTOMER_SUMMARY],
    }
