"""Customer aggregate: a shop's customer, whose name is copied onto orders."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.aggregate(limit=None)
class Customer:
    shop_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    phone = String(max_length=50, default="")
