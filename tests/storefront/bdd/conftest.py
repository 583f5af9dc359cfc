"""Shared BDD fixtures and step definitions for the Storefront domain."""

import pytest
from pytest_bdd import given, parsers, then

from storefront.errors import error_kind
from storefront.reconciliation.temp_orders import TempOrderLine


@pytest.fixture()
def scenario_state():
    """Mutable state shared between the steps of one scenario."""
    return {"products": {}, "lines": [], "customer": None, "order": None, "temp_order": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the shop sells "{name}" at {price:d}'))
def _(store, scenario_state, name, price):
    scenario_state["products"][name] = store.add_product("shop-1", name, price)


@given(parsers.cfparse('a customer named "{name}"'))
def _(store, scenario_state, name):
    scenario_state["customer"] = store.add_customer("shop-1", name)


@given("the customer has an active order")
def _(core, scenario_state):
    scenario_state["order"] = core.create_order(scenario_state["customer"].id, "shop-1")


@given(parsers.cfparse('the customer has an active order with {quantity:d} "{product}"'))
def _(core, scenario_state, quantity, product):
    order = core.create_order(scenario_state["customer"].id, "shop-1")
    core.create_order_item(order.id, scenario_state["products"][product].id, quantity)
    scenario_state["order"] = order


@given(parsers.cfparse('that order is marked "{status}"'))
def _(core, scenario_state, status):
    core.update_order(scenario_state["order"].id, status=status)


@given(parsers.cfparse('the customer submits {quantity:d} "{product}"'))
def _(core, scenario_state, quantity, product):
    line = TempOrderLine(scenario_state["products"][product].id, quantity)
    scenario_state["temp_order"] = core.create_temp_order("John Doe", "+62 811", "share-abc", [line])


@given("the customer submits nothing")
def _(core, scenario_state):
    scenario_state["temp_order"] = core.create_temp_order("John Doe", "+62 811", "share-abc")


@given("accepting temp orders fails")
def _(store):
    store.fail_on("update_temp_order_status")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the customer has exactly one active order")
def _(store, scenario_state):
    customer_id = scenario_state["customer"].id
    active = [
        order
        for order in store.orders.values()
        if order.customer_id == customer_id and order.status in {"created", "in_progress", "in_delivery"}
    ]
    assert len(active) == 1


@then(parsers.cfparse('the {action} fails with a "{kind}" error'))
def _(scenario_state, action, kind):
    assert scenario_state["error"] is not None, f"expected the {action} to fail"
    assert error_kind(scenario_state["error"]) == kind
