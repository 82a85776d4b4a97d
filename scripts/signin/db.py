"""Database helpers: connection pool, transactions, PostgreSQL account store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator, Optional

import psycopg2.pool

from scripts.signin.base_provider import BaseProvider
from scripts.signin.config import DatabaseConfig

if TYPE_CHECKING:
    from scripts.signin.account import Account

logger = logging.getLogger("signin.db")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS signin_accounts (
    id           BIGSERIAL PRIMARY KEY,
    display_name TEXT,
    created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS signin_provider_links (
    account_id       BIGINT NOT NULL REFERENCES signin_accounts (id) ON DELETE CASCADE,
    provider_id      TEXT NOT NULL,
    provider_user_id TEXT NOT NULL,
    created_at       TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at       TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (provider_id, provider_user_id)
);

CREATE INDEX IF NOT EXISTS signin_provider_links_account_idx
    ON signin_provider_links (account_id);
"""


class Database:
    """Thin wrapper around a ThreadedConnectionPool."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._pool = psycopg2.pool.ThreadedConnectionPool(
            minconn=config.min_connections,
            maxconn=config.max_connections,
            dsn=config.url,
        )

    def close(self) -> None:
        self._pool.closeall()

    @contextmanager
    def connection(self) -> Generator:
        conn = self._pool.getconn()
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    @contextmanager
    def transaction(self) -> Generator:
        """Yield a cursor inside an auto-commit/rollback transaction."""
        with self.connection() as conn:
            try:
                with conn.cursor() as cur:
                    yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def ensure_schema(self) -> None:
        with self.transaction() as cur:
            cur.execute(SCHEMA_SQL)
        logger.info("Schema ensured")


class PostgresAccountStore:
    """AccountStore backed by the signin_accounts / signin_provider_links tables.

    Each call is its own transaction. Database errors propagate unchanged.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def _provider_user_id(provider: BaseProvider, account: Account) -> str:
        user_id = account.get_provider_user_id(provider)
        if user_id is None:
            raise ValueError(f"Account has no {provider.id()} login to store")
        return user_id

    def find_account_id(self, provider: BaseProvider, account: Account) -> Optional[int]:
        user_id = self._provider_user_id(provider, account)
        with self.db.transaction() as cur:
            cur.execute(
                """SELECT account_id FROM signin_provider_links
                   WHERE provider_id = %s AND provider_user_id = %s""",
                (provider.id(), user_id),
            )
            row = cur.fetchone()
        return row[0] if row else None

    def create_account(self, provider: BaseProvider, account: Account) -> int:
        user_id = self._provider_user_id(provider, account)
        with self.db.transaction() as cur:
            cur.execute(
                "INSERT INTO signin_accounts (display_name) VALUES (%s) RETURNING id",
                (account.display_name,),
            )
            account_id = cur.fetchone()[0]
            cur.execute(
                """INSERT INTO signin_provider_links
                   (account_id, provider_id, provider_user_id)
                   VALUES (%s, %s, %s)""",
                (account_id, provider.id(), user_id),
            )
        logger.info(
            "Created account",
            extra={"account_id": account_id, "provider": provider.id()},
        )
        return account_id

    def associate(self, provider: BaseProvider, account: Account, account_id: int) -> None:
        user_id = self._provider_user_id(provider, account)
        with self.db.transaction() as cur:
            cur.execute(
                """INSERT INTO signin_provider_links
                   (account_id, provider_id, provider_user_id)
                   VALUES (%s, %s, %s)
                   ON CONFLICT (provider_id, provider_user_id) DO UPDATE SET
                       account_id = EXCLUDED.account_id,
                       updated_at = NOW()""",
                (account_id, provider.id(), user_id),
            )

    def delete_provider_link(self, provider: BaseProvider, account: Account) -> None:
        # An unresolved account owns no rows
        account_id = account.get_id()
        user_id = account.get_provider_user_id(provider)
        if account_id is None or user_id is None:
            return
        with self.db.transaction() as cur:
            cur.execute(
                """DELETE FROM signin_provider_links
                   WHERE provider_id = %s AND provider_user_id = %s
                     AND account_id = %s""",
                (provider.id(), user_id, account_id),
            )

    def delete_account(self, account_id: int) -> None:
        # Links go with the account via ON DELETE CASCADE
        with self.db.transaction() as cur:
            cur.execute("DELETE FROM signin_accounts WHERE id = %s", (account_id,))

    def connected_provider_ids(self, account_id: int) -> set[str]:
        with self.db.transaction() as cur:
            cur.execute(
                """SELECT DISTINCT provider_id FROM signin_provider_links
                   WHERE account_id = %s""",
                (account_id,),
            )
            return {row[0] for row in cur.fetchall()}
