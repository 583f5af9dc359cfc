"""Storage adapters for order reconciliation: pluggable behind the ports in `port.py`."""

import os

from storefront.persistence.port import Persistence


def build_persistence(adapter: str | None = None) -> Persistence:
    """Return the storage adapter named by `adapter` or `STOREFRONT_PERSISTENCE`.

    `protean` (default) stores through the storefront domain; `fake` keeps
    everything in memory.
    """
    adapter = adapter or os.environ.get("STOREFRONT_PERSISTENCE", "protean")
    if adapter == "protean":
        from storefront.domain import storefront
        from storefront.persistence.protean_adapter import protean_persistence

        return protean_persistence(storefront)
    if adapter == "fake":
        from storefront.persistence.fake_adapter import FakeStore

        return FakeStore().persistence()
    raise ValueError(f"Unknown persistence adapter: {adapter}")
