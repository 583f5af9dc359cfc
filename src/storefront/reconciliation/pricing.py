"""Total price rules for orders produced by merging temp orders."""

import os
from collections.abc import Iterable
from enum import Enum


class TotalPricePolicy(Enum):
    """What a merge does with the order total.

    `AS_OBSERVED`: a new order keeps its stored total (0) and the response shows
    it; merging into an existing order reports the recomputed sum without
    writing it. `PERSIST_COMPUTED`: both paths write the recomputed sum.
    """

    AS_OBSERVED = "as_observed"
    PERSIST_COMPUTED = "persist_computed"

    @classmethod
    def from_env(cls) -> "TotalPricePolicy":
        return cls(os.environ.get("STOREFRONT_TOTAL_PRICE_POLICY", cls.AS_OBSERVED.value).lower())


def total_of(items: Iterable) -> int:
    """Σ price × quantity over anything with `price` and `quantity`."""
    return sum(item.price * item.quantity for item in items)
