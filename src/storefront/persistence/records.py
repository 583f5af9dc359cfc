"""Plain records exchanged between the reconciliation core and storage."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta


@dataclass(frozen=True)
class OrderRecord:
    id: str
    shop_id: str
    customer_id: str
    customer_name: str
    total_price: int
    status: str
    notes: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class OrderItemRecord:
    id: str
    order_id: str
    product_id: str
    product_name: str
    price: int
    quantity: int
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TempOrderRecord:
    id: str
    shop_id: str
    customer_name: str
    customer_phone: str
    total_price: int
    status: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TempOrderItemRecord:
    id: str
    temp_order_id: str
    product_id: str
    product_name: str
    price: int
    quantity: int
    created_at: datetime


@dataclass(frozen=True)
class OrderPatch:
    """Sparse order update. `None` leaves the field as stored."""

    total_price: int | None = None
    status: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class OrderItemPatch:
    """Sparse order item update. A new product re-takes name and price from the catalogue."""

    product_id: str | None = None
    quantity: int | None = None


@dataclass(frozen=True)
class OrderFilterOptions:
    """Listing filters for orders and temp orders.

    `search` matches customer name or phone, case-insensitively; blank means no
    filter. `date_from` and `date_to` are inclusive calendar days in UTC.
    """

    search: str | None = None
    date_from: date | None = None
    date_to: date | None = None

    def search_term(self) -> str | None:
        term = (self.search or "").strip()
        return term.lower() or None

    def created_at_bounds(self) -> tuple[datetime | None, datetime | None]:
        """Half-open `[start, end)` window; `end` is the start of the day after `date_to`."""
        start = datetime.combine(self.date_from, time.min, tzinfo=UTC) if self.date_from else None
        end = datetime.combine(self.date_to + timedelta(days=1), time.min, tzinfo=UTC) if self.date_to else None
        return start, end

    def matches(self, created_at: datetime, *texts: str | None) -> bool:
        term = self.search_term()
        if term and not any(term in (text or "").lower() for text in texts):
            return False

        start, end = self.created_at_bounds()
        if start is None and end is None:
            return True

        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        if start is not None and created_at < start:
            return False
        if end is not None and created_at >= end:
            return False
        return True
