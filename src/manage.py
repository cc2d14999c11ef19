"""Order Intake database management CLI.

Creates or drops the order tables in the configured database.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py setup-db --database-url sqlite:///orders.db
"""

import argparse
import sys

from intake.config import Settings
from intake.utils.db import drop_db, make_engine, setup_db


def setup_database(settings: Settings):
    """Create the order schema."""
    print(f"Creating order schema in {settings.url.render_as_string(hide_password=True)}...")
    setup_db(make_engine(settings.url))
    print("Done.")


def drop_database(settings: Settings):
    """Drop the order schema."""
    print(f"Dropping order schema in {settings.url.render_as_string(hide_password=True)}...")
    drop_db(make_engine(settings.url))
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Order Intake database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("setup-db", "Create all order tables"), ("drop-db", "Drop all order tables")):
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument(
            "--database-url",
            help="Full connection URL (default: DATABASE_URL or the DB_* variables)",
        )

    args = parser.parse_args(argv)

    settings = Settings.from_env().override(database_url=args.database_url)

    if args.command == "setup-db":
        setup_database(settings)
    elif args.command == "drop-db":
        drop_database(settings)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
