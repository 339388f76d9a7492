"""Domain initialization and configuration.

A single Protean domain hosts identity, catalogue and ordering so that the
checkout flow (cart, products and order) commits in one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
