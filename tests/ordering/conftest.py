import threading
from dataclasses import dataclass, replace

import pytest
from ordering.order.payment import SimulatedPaymentGateway
from ordering.order.ports import OrderStore, ProductSnapshot, ProductStore
from shared.errors import NotFound, StoreUnavailable


@pytest.fixture(autouse=True)
def _ctx():
    """Run every ordering test inside the ordering domain context."""
    from ordering.domain import ordering

    with ordering.domain_context():
        yield


@dataclass
class StockedProduct:
    snapshot: ProductSnapshot
    total_orders: int = 0


class InMemoryProductStore(ProductStore):
    """Product store double with the same atomic stock semantics as the real adapter."""

    def __init__(self):
        self._products: dict[str, StockedProduct] = {}
        self._lock = threading.Lock()
        self.fail_on: set[str] = set()
        self.adjustments: list[tuple[str, int]] = []

    def put(self, product_id, name="Widget", price=10.0, stock=10, is_active=True, image=None):
        self._products[product_id] = StockedProduct(
            ProductSnapshot(
                product_id=product_id,
                name=name,
                price=price,
                stock=stock,
                is_active=is_active,
                image=image,
            )
        )

    def stock_of(self, product_id) -> int:
        return self._products[product_id].snapshot.stock

    def total_orders_of(self, product_id) -> int:
        return self._products[product_id].total_orders

    def find_product(self, product_id):
        record = self._products.get(product_id)
        return record.snapshot if record else None

    def adjust_stock(self, product_id, delta):
        if product_id in self.fail_on:
            raise StoreUnavailable(f"Could not update stock for product {product_id}")
        with self._lock:
            record = self._products.get(product_id)
            if record is None:
                return False
            if delta < 0 and not record.snapshot.is_active:
                return False
            new_stock = record.snapshot.stock + delta
            if new_stock < 0:
                return False
            record.snapshot = replace(record.snapshot, stock=new_stock)
            record.total_orders = max(record.total_orders - delta, 0)
            self.adjustments.append((product_id, delta))
            return True


class InMemoryOrderStore(OrderStore):
    def __init__(self):
        self._orders = {}
        self.fail_writes = False

    def add(self, order):
        if self.fail_writes:
            raise StoreUnavailable("Order store is unavailable")
        self._orders[str(order.id)] = order

    def get(self, order_id):
        try:
            return self._orders[str(order_id)]
        except KeyError:
            raise NotFound("Order not found") from None

    def save(self, order):
        self.add(order)

    def find(self, order_filter):
        return [order for order in self._orders.values() if order_filter.matches(order)]

    def count(self) -> int:
        return len(self._orders)


@pytest.fixture
def products():
    store = InMemoryProductStore()
    store.put("p-300", name="Espresso Machine", price=300.0, stock=5, image="https://img.example.com/espresso.jpg")
    store.put("p-100", name="Coffee Grinder", price=100.0, stock=3)
    store.put("p-last", name="Limited Edition Mug", price=25.0, stock=1)
    store.put("p-off", name="Retired Kettle", price=40.0, stock=9, is_active=False)
    return store


@pytest.fixture
def orders():
    return InMemoryOrderStore()


@pytest.fixture
def workflow(products, orders):
    from ordering.order.workflow import OrderWorkflow
    from shared.settings import Settings

    return OrderWorkflow(products, orders, settings=Settings())


@pytest.fixture
def address():
    return {
        "street": "1 Market Street",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    }


class RecordingGateway(SimulatedPaymentGateway):
    """Settles like the simulated gateway and remembers what it was asked."""

    def __init__(self):
        self.settlements = []

    def settle(self, order_number, amount, payment_method):
        self.settlements.append((order_number, amount, payment_method))
        return super().settle(order_number, amount, payment_method)


@pytest.fixture
def recording_gateway():
    return RecordingGateway()
