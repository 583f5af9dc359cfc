"""Storefront domain API package."""

from storefront.api.routes import order_router, public_router, temp_order_router

__all__ = ["order_router", "temp_order_router", "public_router"]
