"""Atomic stock adjustment.

``adjust_stock`` is a compare-and-set on a single product: the read, the
sufficiency check and the write happen under one lock, so two callers racing
for the last unit cannot both succeed. Callers must have the catalogue domain
context active.
"""

import threading

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from shared.errors import InsufficientStock, InvalidState, StoreUnavailable

logger = structlog.get_logger(__name__)

_stock_lock = threading.Lock()


def find_product(product_id: str) -> Product | None:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None


def adjust_stock(product_id: str, delta: int, attempts: int = 3) -> bool:
    """Add ``delta`` to a product's stock and subtract it from ``total_orders``.

    Returns False, leaving the product untouched, when the product is missing,
    inactive (for withdrawals) or the new stock would be negative. Version
    conflicts from the store are retried up to ``attempts`` times before
    giving up with ``StoreUnavailable``.
    """
    if delta == 0:
        return True

    repo = current_domain.repository_for(Product)
    for attempt in range(1, attempts + 1):
        with _stock_lock:
            product = find_product(product_id)
            if product is None:
                return False

            try:
                if delta < 0:
                    product.withdraw_stock(-delta)
                else:
                    product.restore_stock(delta)
            except (InsufficientStock, InvalidState) as exc:
                logger.info("stock_adjustment_refused", product_id=product_id, delta=delta, reason=exc.kind)
                return False

            try:
                repo.add(product)
            except ExpectedVersionError:
                logger.warning("stock_adjustment_conflict", product_id=product_id, delta=delta, attempt=attempt)
                continue

        logger.debug("stock_adjusted", product_id=product_id, delta=delta, stock=product.stock)
        return True

    raise StoreUnavailable(f"Could not update stock for product {product_id}")
