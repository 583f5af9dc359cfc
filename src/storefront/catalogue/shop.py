"""Shop aggregate: the tenant, reachable by customers through its share token."""

import secrets

from protean.fields import String

from storefront.domain import storefront


@storefront.aggregate(limit=None)
class Shop:
    name = String(required=True, max_length=255)
    share_token = String(required=True, max_length=64, unique=True)

    @classmethod
    def create(cls, name, share_token=None):
        return cls(name=name, share_token=share_token or secrets.token_urlsafe(16))
