"""Product aggregate: the catalogue entry order lines take their name and price from."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.aggregate(limit=None)
class Product:
    shop_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Integer(required=True, min_value=0)
