"""Ordering bounded context: orders and the order placement workflow.

Orders are plain CQRS aggregates. Placement and cancellation coordinate with
the catalogue's stock through the ``ProductStore`` port (see
``ordering.order.workflow``).
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
