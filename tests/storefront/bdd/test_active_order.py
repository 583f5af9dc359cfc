"""BDD tests for the one-active-order-per-customer rule."""

from pytest_bdd import scenarios, when

from storefront.errors import ActiveOrderConflict

scenarios("features/active_order.feature")


@when("staff open an order for the customer")
def _(core, scenario_state):
    try:
        core.create_order(scenario_state["customer"].id, "shop-1")
    except ActiveOrderConflict as exc:
        scenario_state["error"] = exc
