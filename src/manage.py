"""Storefront database management CLI.

Creates and drops the storefront schema on SQL providers.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py add-admin --username owner@example.com --password secret123
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


def add_admin(username, password):
    from storefront.access.management import AddAdmin
    from storefront.domain import storefront

    storefront.init()
    with storefront.domain_context():
        admin_id = storefront.process(AddAdmin(username=username, password=password), asynchronous=False)
    print(f"Admin {username} added ({admin_id}).")


def main():
    parser = argparse.ArgumentParser(description="Aishwarya Collections storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("add-admin", help="Create a back-office admin")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "add-admin":
        add_admin(args.username, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
