"""Storefront database management CLI.

Provides commands to create and drop database schemas for all domains, and to
seed a fresh store with an administrator and a starter catalogue.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed --admin-email admin@example.com --admin-password change-me
"""

import argparse
import json
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering"]

SEED_CATEGORIES = [
    {"name": "Electronics", "description": "Phones, audio and accessories"},
    {"name": "Home", "description": "Kitchen, furniture and decor"},
    {"name": "Books", "description": "Fiction, non-fiction and reference"},
]

SEED_PRODUCTS = [
    {
        "category": "Electronics",
        "name": "Wireless Headphones",
        "description": "Over-ear headphones with active noise cancellation.",
        "price": 199.99,
        "sku": "EL-WH-001",
        "stock": 25,
        "images": ["https://picsum.photos/seed/headphones/600/600"],
        "is_featured": True,
    },
    {
        "category": "Electronics",
        "name": "USB-C Charger",
        "description": "65W fast charger with two ports.",
        "price": 39.5,
        "sku": "EL-CH-002",
        "stock": 120,
        "images": ["https://picsum.photos/seed/charger/600/600"],
    },
    {
        "category": "Home",
        "name": "Ceramic Mug",
        "description": "Stoneware mug, 350 ml.",
        "price": 12.0,
        "sku": "HM-MG-001",
        "stock": 8,
        "images": ["https://picsum.photos/seed/mug/600/600"],
    },
    {
        "category": "Books",
        "name": "Domain Modeling Handbook",
        "description": "A practical guide to modeling business software.",
        "price": 45.0,
        "sku": "BK-DM-001",
        "stock": 40,
        "images": ["https://picsum.photos/seed/book/600/600"],
    },
]


def _domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    return {"identity": identity, "catalogue": catalogue, "ordering": ordering}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    all_domains = _domains()
    targets = {d: all_domains[d] for d in domains} if domains else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    all_domains = _domains()
    targets = {d: all_domains[d] for d in domains} if domains else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed(admin_email, admin_password, admin_name="Administrator"):
    """Create an administrator and a starter catalogue. Safe to re-run."""
    from catalogue.category.management import CreateCategory
    from catalogue.category.queries import list_categories
    from catalogue.product.creation import CreateProduct
    from identity.user.credentials import hash_password
    from identity.user.queries import find_by_email
    from identity.user.user import Role, User
    from shared.errors import DuplicateEntry

    domains = _domains()
    for domain in domains.values():
        domain.init()

    identity = domains["identity"]
    with identity.domain_context():
        if find_by_email(admin_email) is None:
            admin = User.register(
                name=admin_name,
                email=admin_email,
                password_hash=hash_password(admin_password),
                role=Role.ADMIN.value,
            )
            identity.repository_for(User).add(admin)
            print(f"Created administrator {admin_email}")
        else:
            print(f"Administrator {admin_email} already exists")

    catalogue = domains["catalogue"]
    with catalogue.domain_context():
        for category in SEED_CATEGORIES:
            try:
                catalogue.process(CreateCategory(**category), asynchronous=False)
                print(f"Created category {category['name']}")
            except DuplicateEntry:
                print(f"Category {category['name']} already exists")

        category_ids = {c.name: str(c.id) for c in list_categories()}
        for product in SEED_PRODUCTS:
            fields = {k: v for k, v in product.items() if k not in ("category", "images")}
            command = CreateProduct(
                category_id=category_ids[product["category"]],
                images=json.dumps(product["images"]),
                **fields,
            )
            try:
                catalogue.process(command, asynchronous=False)
                print(f"Created product {product['name']}")
            except DuplicateEntry:
                print(f"Product {product['sku']} already exists")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    seed_parser = subparsers.add_parser("seed", help="Create an administrator and sample catalogue")
    seed_parser.add_argument("--admin-email", required=True)
    seed_parser.add_argument("--admin-password", required=True)
    seed_parser.add_argument("--admin-name", default="Administrator")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed":
        seed(args.admin_email, args.admin_password, args.admin_name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
