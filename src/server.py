"""Command-line runner for the Order Intake API.

Settings come from the environment (see ``intake.config.Settings``); any
option given here overrides its environment variable.

Usage:
    python src/server.py
    python src/server.py --host 0.0.0.0 --port 8081 --db-user app --db-name orders
    python src/server.py --database-url sqlite:///orders.db
"""

import argparse

import uvicorn

from intake.config import Settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Order Intake API server")
    parser.add_argument("--host", help="Bind address (env SERVER_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (env SERVER_PORT)")
    parser.add_argument("--db-user", help="Database user (env DB_USER)")
    parser.add_argument("--db-password", help="Database password (env DB_PASSWORD)")
    parser.add_argument("--db-host", help="Database host (env DB_HOST)")
    parser.add_argument("--db-port", type=int, help="Database port (env DB_PORT)")
    parser.add_argument("--db-name", help="Database name (env DB_NAME)")
    parser.add_argument("--database-url", help="Full connection URL, overrides the --db-* options (env DATABASE_URL)")
    return parser.parse_args(argv)


def settings_from_args(args) -> Settings:
    return Settings.from_env().override(
        host=args.host,
        port=args.port,
        db_user=args.db_user,
        db_password=args.db_password,
        db_host=args.db_host,
        db_port=args.db_port,
        db_name=args.db_name,
        database_url=args.database_url,
    )


def main(argv=None):
    settings = settings_from_args(parse_args(argv))

    from app import create_app

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
