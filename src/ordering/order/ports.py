"""Ports the order workflow depends on.

The workflow never reaches into another context's storage: products are read
and stock is adjusted through ``ProductStore``, orders are kept through
``OrderStore``. Production adapters live in ``ordering.order.adapters``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ordering.order.order import Order
from ordering.order.queries import OrderFilter


@dataclass(frozen=True)
class ProductSnapshot:
    """What the workflow needs to know about a product at placement time."""

    product_id: str
    name: str
    price: float
    stock: int
    is_active: bool
    image: str | None = None


@dataclass(frozen=True)
class Requester:
    """Who is asking: the user id and whether they act as an administrator."""

    user_id: str
    is_admin: bool = False


class ProductStore(ABC):
    @abstractmethod
    def find_product(self, product_id: str) -> ProductSnapshot | None:
        """Current product state, or None when the product does not exist."""
        ...

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int) -> bool:
        """Atomically add ``delta`` to stock (and subtract it from total orders).

        Must refuse, returning False and changing nothing, when the resulting
        stock would be negative.
        """
        ...


class OrderStore(ABC):
    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order."""
        ...

    @abstractmethod
    def get(self, order_id: str) -> Order:
        """Load an order, raising ``NotFound`` when it does not exist."""
        ...

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist changes to an existing order.

        Raises ``InvalidState`` when the order was changed since it was loaded.
        """
        ...

    @abstractmethod
    def find(self, order_filter: OrderFilter) -> list[Order]:
        """Every order matching ``order_filter``, in no particular order."""
        ...
