"""Request-scoped dependencies for the Storefront API."""

from functools import lru_cache

from fastapi import Header

from storefront.persistence import build_persistence
from storefront.reconciliation.core import OrderReconciliation
from storefront.utils.logging import add_context


@lru_cache(maxsize=1)
def get_reconciliation() -> OrderReconciliation:
    """The process-wide reconciliation core, wired to the configured storage adapter."""
    return OrderReconciliation(build_persistence())


async def get_shop_id(x_shop_id: str = Header(..., min_length=1)) -> str:
    """The calling shop, taken from the `X-Shop-Id` header and bound to the request's log context."""
    add_context(shop_id=x_shop_id)
    return x_shop_id
