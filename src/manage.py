"""Storefront database management CLI.

Creates and drops the storefront schema, and seeds a demo shop for local runs.

Usage:
    python src/manage.py setup-db    # Create all tables
    python src/manage.py drop-db     # Drop all tables
    python src/manage.py seed-demo   # Create a demo shop, customer and products
"""

import argparse
import sys


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_demo(share_token="demo-shop"):
    """Create a shop reachable at `/public/shops/<share_token>/orders` with a few products."""
    from storefront.catalogue.customer import Customer
    from storefront.catalogue.product import Product
    from storefront.catalogue.shop import Shop
    from storefront.domain import storefront

    storefront.init()
    with storefront.domain_context():
        shop = Shop.create(name="Demo Shop", share_token=share_token)
        storefront.repository_for(Shop).add(shop)

        customer = Customer(shop_id=shop.id, name="Jane Doe", phone="+62 812 0000 0000")
        storefront.repository_for(Customer).add(customer)

        products = [
            Product(shop_id=shop.id, name="Espresso Beans 1kg", price=250000),
            Product(shop_id=shop.id, name="Pour-over Kettle", price=450000),
        ]
        for product in products:
            storefront.repository_for(Product).add(product)

    print(f"Shop:     {shop.id} (share token: {shop.share_token})")
    print(f"Customer: {customer.id}")
    for product in products:
        print(f"Product:  {product.id} {product.name} @ {product.price}")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-demo", help="Seed a demo shop with products and a customer")
    seed_parser.add_argument("--share-token", default="demo-shop", help="Share token for the demo shop")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-demo":
        seed_demo(args.share_token)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
