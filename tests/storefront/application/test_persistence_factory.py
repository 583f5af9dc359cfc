import pytest

from storefront.persistence import build_persistence
from storefront.persistence.fake_adapter import FakeStore
from storefront.persistence.protean_adapter import ProteanOrderRepository, ProteanTransactionSource


def test_fake_adapter():
    persistence = build_persistence("fake")

    assert isinstance(persistence.orders, FakeStore)
    assert persistence.orders is persistence.items is persistence.transactions is persistence.shops


def test_adapter_from_environment(monkeypatch):
    monkeypatch.setenv("STOREFRONT_PERSISTENCE", "protean")

    persistence = build_persistence()

    assert isinstance(persistence.orders, ProteanOrderRepository)
    assert isinstance(persistence.transactions, ProteanTransactionSource)


def test_unknown_adapter():
    with pytest.raises(ValueError):
        build_persistence("redis")
