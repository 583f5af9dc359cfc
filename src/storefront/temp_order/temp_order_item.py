"""TempOrderItem aggregate: a product line on a temp order, priced at submission time."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.aggregate(limit=None)
class TempOrderItem:
    temp_order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(max_length=255, default="")
    price = Integer(min_value=0, default=0)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()

    @classmethod
    def create(cls, temp_order_id, product, quantity):
        return cls(
            temp_order_id=temp_order_id,
            product_id=product.id,
            product_name=product.name,
            price=product.price,
            quantity=quantity,
            created_at=datetime.now(UTC),
        )
