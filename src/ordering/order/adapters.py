"""Production adapters for the workflow ports.

Each call enters the owning domain's context, so the adapters are safe to use
from request handlers of any context and from worker threads.
"""

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError

from catalogue.domain import catalogue
from catalogue.product import stock
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.ports import OrderStore, ProductSnapshot, ProductStore
from ordering.order.queries import OrderFilter
from shared.errors import InvalidState, NotFound
from shared.pagination import fetch_all


class CatalogueProductStore(ProductStore):
    """Reads products and adjusts stock in the catalogue context."""

    def __init__(self, attempts: int = 3) -> None:
        self.attempts = attempts

    def find_product(self, product_id: str) -> ProductSnapshot | None:
        with catalogue.domain_context():
            product = stock.find_product(product_id)
            if product is None:
                return None
            return ProductSnapshot(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
                is_active=product.is_active,
                image=product.primary_image,
            )

    def adjust_stock(self, product_id: str, delta: int) -> bool:
        with catalogue.domain_context():
            return stock.adjust_stock(product_id, delta, attempts=self.attempts)


def _loaded(order: Order) -> Order:
    # Line items load lazily and need the domain context, so pull them in now
    len(order.items)
    return order


class RepositoryOrderStore(OrderStore):
    """Keeps orders in the ordering domain's repository."""

    def add(self, order: Order) -> None:
        with ordering.domain_context():
            ordering.repository_for(Order).add(order)

    def get(self, order_id: str) -> Order:
        with ordering.domain_context():
            try:
                return _loaded(ordering.repository_for(Order).get(order_id))
            except ObjectNotFoundError:
                raise NotFound("Order not found") from None

    def save(self, order: Order) -> None:
        try:
            self.add(order)
        except ExpectedVersionError:
            raise InvalidState("Order was changed by another request") from None

    def find(self, order_filter: OrderFilter) -> list[Order]:
        with ordering.domain_context():
            repo = ordering.repository_for(Order)
            return [_loaded(order) for order in fetch_all(repo) if order_filter.matches(order)]
