import logging

import pytest
import structlog

from storefront.utils.logging import add_context, clear_context, configure_logging, get_log_level


@pytest.fixture
def env(monkeypatch):
    for name in ("ENV", "ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL", "LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.parametrize(
    "environment, level",
    [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("qa", "INFO")],
)
def test_level_follows_environment(env, environment, level):
    env.setenv("ENVIRONMENT", environment)
    assert get_log_level() == level


def test_defaults_to_development(env):
    assert get_log_level() == "DEBUG"


def test_explicit_level_wins(env):
    env.setenv("ENVIRONMENT", "production")
    env.setenv("LOG_LEVEL", "error")
    assert get_log_level() == "ERROR"


def test_file_handlers_only_with_a_log_directory(env, tmp_path):
    env.setenv("ENVIRONMENT", "test")
    try:
        configure_logging(log_dir=str(tmp_path), log_file_prefix="orders")
        handlers = logging.getLogger().handlers

        assert (tmp_path / "orders.log").exists()
        assert len(handlers) == 3
    finally:
        configure_logging()

    assert len(logging.getLogger().handlers) == 1


def test_context_is_bound_until_cleared():
    clear_context()
    add_context(shop_id="shop-1", order_id="order-1")

    assert structlog.contextvars.get_contextvars() == {"shop_id": "shop-1", "order_id": "order-1"}

    clear_context()
    assert structlog.contextvars.get_contextvars() == {}
