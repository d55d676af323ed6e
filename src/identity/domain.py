"""Identity bounded context — customer accounts and authentication."""

import structlog
from protean.domain import Domain

identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
