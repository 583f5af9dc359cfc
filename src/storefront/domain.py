"""Storefront bounded context: staff orders, order items and customer temp orders.

Holds the Protean domain that persists orders, temp orders and the read-only
shop/catalogue data they snapshot. Order reconciliation itself lives in
``storefront.reconciliation`` and talks to storage through the ports in
``storefront.persistence``.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
