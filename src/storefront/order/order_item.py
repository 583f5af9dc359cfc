"""OrderItem aggregate: one product line on an order.

Product name and unit price are copied from the catalogue when the line is
written, so later catalogue edits never change what was ordered.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.aggregate(limit=None)
class OrderItem:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(max_length=255, default="")
    price = Integer(min_value=0, default=0)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, order_id, product, quantity):
        return cls(
            order_id=order_id,
            product_id=product.id,
            product_name=product.name,
            price=product.price,
            quantity=quantity,
            created_at=datetime.now(UTC),
        )

    def change_quantity(self, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["must be a positive integer"]})
        self.quantity = quantity
        self.updated_at = datetime.now(UTC)

    def change_product(self, product):
        """Point the line at another product, re-taking its name and price."""
        self.product_id = product.id
        self.product_name = product.name
        self.price = product.price
        self.updated_at = datetime.now(UTC)
