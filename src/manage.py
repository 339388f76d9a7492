"""Storefront management CLI.

Usage:
    python src/manage.py setup-db        # Create all tables
    python src/manage.py drop-db         # Drop all tables
    python src/manage.py seed-products   # Load the demo catalogue
    python src/manage.py seed-products --file products.json
"""

import argparse
import json
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_databases():
    """Create database schemas for the storefront domain."""
    from storefront.utils.db import setup_db

    print("Creating storefront database schema...")
    setup_db(_domain())
    print("Done.")


def drop_databases():
    """Drop database schemas for the storefront domain."""
    from storefront.utils.db import drop_db

    print("Dropping storefront database schema...")
    drop_db(_domain())
    print("Done.")


def seed_products(path=None, domain=None):
    """Insert the demo catalogue (or the products listed in ``path``). Returns the count inserted."""
    from storefront.catalogue.stocking import SeedProducts

    payload = None
    if path:
        with open(path, encoding="utf-8") as fh:
            payload = json.dumps(json.load(fh))

    domain = domain or _domain()
    with domain.domain_context():
        inserted = domain.process(SeedProducts(products=payload), asynchronous=False)

    print(f"Inserted {inserted} product(s).")
    return inserted


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-products", help="Load products into the catalogue")
    seed_parser.add_argument("--file", help="JSON file with a list of {product_id, name, price, stock}")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed-products":
        seed_products(args.file)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
