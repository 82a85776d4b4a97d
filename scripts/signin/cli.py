"""CLI entry point: init-db, providers, delete."""

from __future__ import annotations

import argparse
import logging

from scripts.signin.config import load_config
from scripts.signin.db import Database, PostgresAccountStore
from scripts.signin.logging_config import configure_logging

logger = logging.getLogger("signin.cli")


def cmd_init_db(args: argparse.Namespace, db: Database) -> None:
    """Create the account tables if they do not exist."""
    db.ensure_schema()


def cmd_providers(args: argparse.Namespace, db: Database) -> None:
    """Print the provider ids linked to an account."""
    store = PostgresAccountStore(db)
    provider_ids = sorted(store.connected_provider_ids(args.account_id))
    if not provider_ids:
        print(f"No providers linked to account {args.account_id}.")
        return
    for provider_id in provider_ids:
        print(provider_id)


def cmd_delete(args: argparse.Namespace, db: Database) -> None:
    """Delete an account and all of its provider links."""
    store = PostgresAccountStore(db)
    store.delete_account(args.account_id)
    logger.info("Deleted account", extra={"account_id": args.account_id})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signin",
        description="Multi-provider sign-in account administration",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    providers_parser = subparsers.add_parser(
        "providers", help="List provider ids linked to an account"
    )
    providers_parser.add_argument("--account-id", "-a", type=int, required=True)
    providers_parser.set_defaults(func=cmd_providers)

    delete_parser = subparsers.add_parser(
        "delete", help="Delete an account and its provider links"
    )
    delete_parser.add_argument("--account-id", "-a", type=int, required=True)
    delete_parser.set_defaults(func=cmd_delete)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config = load_config()
    configure_logging(config.log_level)
    db = Database(config.database)
    try:
        args.func(args, db)
    finally:
        db.close()
