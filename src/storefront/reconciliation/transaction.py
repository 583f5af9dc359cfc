"""Transaction scope used by every multi-write reconciliation operation."""

from collections.abc import Iterator
from contextlib import contextmanager

from storefront.errors import error_kind
from storefront.persistence.port import Transaction, TransactionSource
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def transaction(source: TransactionSource, operation: str, **context) -> Iterator[Transaction]:
    """Begin a transaction, commit it when the block completes, roll back on any error.

    The original exception is re-raised unchanged after the rollback, even when
    the rollback itself fails. A failing commit propagates as is; the adapter
    discards the transaction's writes.
    """
    tx = source.begin()
    try:
        yield tx
    except Exception as exc:
        try:
            tx.rollback()
        except Exception as rollback_exc:
            logger.error(
                "transaction_rollback_failed",
                operation=operation,
                error=str(rollback_exc),
                **context,
            )
        logger.warning(
            "transaction_rolled_back",
            operation=operation,
            error_kind=error_kind(exc),
            error=str(exc),
            **context,
        )
        raise
    tx.commit()
