from protean.utils.globals import current_domain

from storefront.utils.db import drop_db, setup_db


def test_schema_helpers_skip_non_relational_providers():
    providers = {provider.conn_info["provider"] for provider in current_domain.providers.values()}
    assert "memory" in providers

    setup_db(current_domain)
    drop_db(current_domain)
