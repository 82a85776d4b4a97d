"""Configuration via environment variables with cloud-native secret support.

Supports:
  - Environment variables and .env files (local dev)
  - AWS Secrets Manager / GCP Secret Manager references for the DSN
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from scripts.signin.secrets import resolve_database_url


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    min_connections: int = 2
    max_connections: int = 10


@dataclass(frozen=True)
class SigninConfig:
    database: DatabaseConfig
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> SigninConfig:
    """Load configuration from the environment (after reading any .env file)."""
    load_dotenv()

    min_conn = _int_env("DB_MIN_CONNECTIONS", 2)
    max_conn = _int_env("DB_MAX_CONNECTIONS", 10)
    if min_conn > max_conn:
        raise ValueError("DB_MIN_CONNECTIONS cannot exceed DB_MAX_CONNECTIONS")

    database = DatabaseConfig(
        url=resolve_database_url(),
        min_connections=min_conn,
        max_connections=max_conn,
    )
    return SigninConfig(
        database=database,
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
