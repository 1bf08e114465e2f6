"""Catalogue bounded context: products, categories and product reviews.

Also owns product stock. The ordering context reads and adjusts stock through
its ``ProductStore`` port, never by touching Product records directly.
"""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
