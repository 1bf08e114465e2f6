"""Identity bounded context: user accounts, roles and credentials."""

import structlog
from protean.domain import Domain

identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
