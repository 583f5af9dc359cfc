from storefront.catalogue.customer import Customer
from storefront.catalogue.product import Product
from storefront.catalogue.shop import Shop
from storefront.domain import storefront


@storefront.repository(part_of=Shop)
class Shops:
    def find_by_share_token(self, share_token: str) -> Shop | None:
        return self._dao.query.filter(share_token=share_token).all().first


@storefront.repository(part_of=Product)
class Products:
    def find(self, product_id: str) -> Product | None:
        return self._dao.query.filter(id=product_id).all().first


@storefront.repository(part_of=Customer)
class Customers:
    def find(self, customer_id: str) -> Customer | None:
        return self._dao.query.filter(id=customer_id).all().first

    def find_by_ids(self, customer_ids) -> dict[str, Customer]:
        if not customer_ids:
            return {}
        customers = self._dao.query.filter(id__in=list(customer_ids)).all().items
        return {str(customer.id): customer for customer in customers}
