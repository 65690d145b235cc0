"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Add a small sample catalog
"""

import argparse
import sys

_SAMPLE_CATALOG = [
    {"name": "Cotton T-Shirt", "category": "Apparel", "price": "15.00", "stock": 40},
    {"name": "Denim Jacket", "category": "Apparel", "price": "60.00", "stock": 10},
    {"name": "Leather Wallet", "category": "Accessories", "price": "22.50", "stock": 25},
    {"name": "Canvas Tote", "category": "Accessories", "price": "9.99", "stock": 5},
]


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def seed_catalog():
    from storefront.product.management import AddProduct

    domain = _domain()
    with domain.domain_context():
        for entry in _SAMPLE_CATALOG:
            product_id = domain.process(AddProduct(**entry), asynchronous=False)
            print(f"  {entry['name']}: {product_id}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Add a sample catalog")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_catalog()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
