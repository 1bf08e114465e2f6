"""The order workflow: placement, cancellation and administrative status changes.

Placement runs in phases so that a failure never leaves stock half-taken:

1. Validate every requested line against the catalogue (exists, active,
   enough stock) before touching anything.
2. Withdraw stock line by line through the atomic ``adjust_stock``. If any
   withdrawal is refused the order fails with ``InsufficientStock``.
3. Price the order, number it, settle payment and persist it.

From step 2 on, any failure hands every withdrawn unit back before the error
propagates. Cancellation persists the cancelled order first and only then
hands its stock back, so a cancellation that loses a race with another write
to the same order is rejected and restores nothing.
"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

import structlog

from ordering.order.numbering import generate_order_number
from ordering.order.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)
from ordering.order.payment import PaymentGateway, SimulatedPaymentGateway
from ordering.order.ports import OrderStore, ProductStore, Requester
from ordering.order.pricing import PricingPolicy
from ordering.order.queries import OrderFilter, customer_summary, newest_first, order_statistics
from shared.errors import (
    Forbidden,
    InsufficientStock,
    InvalidState,
    NotFound,
    StoreUnavailable,
    ValidationFailure,
)
from shared.pagination import Page, paginate
from shared.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

_PAYMENT_METHODS = frozenset(m.value for m in PaymentMethod)
_ORDER_STATUSES = frozenset(s.value for s in OrderStatus)
_PAYMENT_STATUSES = frozenset(s.value for s in PaymentStatus)


@dataclass(frozen=True)
class OrderLine:
    """A requested (product, quantity) pair."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class _QuotedLine:
    product_id: str
    name: str
    image: str | None
    price: float
    quantity: int
    line_total: Decimal


def _coerce_line(raw) -> OrderLine:
    if isinstance(raw, OrderLine):
        line = raw
    else:
        try:
            line = OrderLine(product_id=str(raw["product_id"]), quantity=int(raw["quantity"]))
        except (KeyError, TypeError, ValueError):
            raise ValidationFailure(
                "Each item needs a product_id and an integer quantity",
                {"items": ["Each item needs a product_id and an integer quantity"]},
            ) from None
    if line.quantity < 1:
        raise ValidationFailure("Quantity must be at least 1", {"quantity": ["Quantity must be at least 1"]})
    return line


class OrderWorkflow:
    """Order operations over injected stores.

    ``products`` and ``orders`` are the storage ports; ``payments`` settles
    new orders (the simulated gateway by default). ``clock`` returns seconds
    and is only used to enforce the per-placement deadline.
    """

    def __init__(
        self,
        products: ProductStore,
        orders: OrderStore,
        payments: PaymentGateway | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        settings = settings or get_settings()
        self.products = products
        self.orders = orders
        self.payments = payments or SimulatedPaymentGateway()
        self.pricing = PricingPolicy.from_settings(settings)
        self.deadline_seconds = settings.order_deadline_seconds
        self._clock = clock

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def place_order(
        self,
        user_id: str,
        items: Iterable,
        shipping_address: dict,
        payment_method: str,
        notes: str | None = None,
    ) -> Order:
        started = self._clock()
        lines = [_coerce_line(raw) for raw in items]
        if not lines:
            raise ValidationFailure("Order must contain at least one item", {"items": ["At least one item is required"]})
        if payment_method not in _PAYMENT_METHODS:
            raise ValidationFailure(
                f"Unsupported payment method {payment_method!r}",
                {"payment_method": [f"Must be one of {sorted(_PAYMENT_METHODS)}"]},
            )
        address = ShippingAddress(**shipping_address)

        quoted = [self._quote(line) for line in lines]

        withdrawn: list[OrderLine] = []
        try:
            for line, quote in zip(lines, quoted, strict=True):
                self._check_deadline(started)
                if not self.products.adjust_stock(line.product_id, -line.quantity):
                    raise InsufficientStock(
                        f"Insufficient stock for {quote.name}",
                        product_id=line.product_id,
                        requested=line.quantity,
                    )
                withdrawn.append(line)

            totals = self.pricing.totals(quote.line_total for quote in quoted)
            order_number = generate_order_number()
            settlement = self.payments.settle(order_number, float(totals.total), payment_method)

            order = Order.place(
                order_number=order_number,
                user_id=user_id,
                items=[
                    OrderItem(
                        product_id=quote.product_id,
                        name=quote.name,
                        image=quote.image,
                        quantity=quote.quantity,
                        price=quote.price,
                        line_total=float(quote.line_total),
                    )
                    for quote in quoted
                ],
                shipping_address=address,
                payment_method=payment_method,
                subtotal=float(totals.subtotal),
                tax=float(totals.tax),
                shipping_cost=float(totals.shipping_cost),
                total=float(totals.total),
                payment_status=settlement.payment_status,
                notes=notes,
            )
            self._check_deadline(started)
            self.orders.add(order)
        except Exception:
            self._return_stock(withdrawn, reason="placement_failed")
            raise

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(user_id),
            total=order.total,
            lines=len(lines),
        )
        return order

    def _quote(self, line: OrderLine) -> _QuotedLine:
        product = self.products.find_product(line.product_id)
        if product is None:
            raise NotFound(f"Product {line.product_id} not found")
        if not product.is_active:
            raise InvalidState(f"Product {product.name} is not available")
        if product.stock < line.quantity:
            raise InsufficientStock(
                f"Insufficient stock for {product.name}",
                product_id=line.product_id,
                requested=line.quantity,
            )
        return _QuotedLine(
            product_id=product.product_id,
            name=product.name,
            image=product.image,
            price=float(product.price),
            quantity=line.quantity,
            line_total=self.pricing.line_total(product.price, line.quantity),
        )

    def _check_deadline(self, started: float) -> None:
        if self._clock() - started > self.deadline_seconds:
            raise StoreUnavailable("Order placement took too long and was abandoned")

    def _return_stock(self, lines: list[OrderLine], reason: str) -> None:
        """Give back stock taken for ``lines``; failures are logged, not raised."""
        for line in reversed(lines):
            try:
                restored = self.products.adjust_stock(line.product_id, line.quantity)
            except Exception:
                logger.exception("stock_compensation_failed", product_id=line.product_id, quantity=line.quantity)
                continue
            if not restored:
                logger.error("stock_compensation_refused", product_id=line.product_id, quantity=line.quantity)
        if lines:
            logger.warning("stock_compensated", reason=reason, lines=len(lines))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def get_order(self, order_id: str, requester: Requester) -> Order:
        order = self.orders.get(order_id)
        if not (requester.is_admin or order.is_owned_by(requester.user_id)):
            raise Forbidden("Not authorized to view this order")
        return order

    def cancel_order(self, order_id: str, requester: Requester) -> Order:
        order = self.orders.get(order_id)
        if not (requester.is_admin or order.is_owned_by(requester.user_id)):
            raise Forbidden("Not authorized to cancel this order")

        order.cancel()
        # Only the request whose save wins may hand the stock back
        self.orders.save(order)

        for item in order.items:
            product_id = str(item.product_id)
            try:
                restored = self.products.adjust_stock(product_id, item.quantity)
            except Exception:
                logger.exception("stock_restore_failed", order_id=str(order.id), product_id=product_id)
                continue
            if not restored:
                logger.warning("stock_restore_skipped", order_id=str(order.id), product_id=product_id)

        logger.info("order_cancelled", order_id=str(order.id), order_number=order.order_number)
        return order

    def update_order_status(
        self,
        order_id: str,
        order_status: str | None = None,
        payment_status: str | None = None,
    ) -> Order:
        errors = {}
        if order_status is not None and order_status not in _ORDER_STATUSES:
            errors["order_status"] = [f"Must be one of {sorted(_ORDER_STATUSES)}"]
        if payment_status is not None and payment_status not in _PAYMENT_STATUSES:
            errors["payment_status"] = [f"Must be one of {sorted(_PAYMENT_STATUSES)}"]
        if errors:
            raise ValidationFailure("Invalid status value", errors)

        order = self.orders.get(order_id)
        order.change_status(order_status=order_status, payment_status=payment_status)
        self.orders.save(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            order_status=order.order_status,
            payment_status=order.payment_status,
        )
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_orders(self, order_filter: OrderFilter | None = None, page: int = 1, limit: int = 10) -> Page:
        orders = self.orders.find(order_filter or OrderFilter())
        return paginate(newest_first(orders), page, limit)

    def order_statistics(self, now=None) -> dict:
        return order_statistics(self.orders.find(OrderFilter()), now=now)

    def customer_summary(self, user_id: str) -> dict:
        return customer_summary(self.orders.find(OrderFilter(user_id=user_id)))
