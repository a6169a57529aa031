"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

Every helper acquires one pooled connection for a single statement and
releases it on exit. Driver failures are re-raised as `core.errors.StoreError`
so routes never see asyncpg exceptions.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import asyncpg

from .errors import InitializationError, ReferenceViolation, StoreError

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    Resolve the DSN.

    `DATABASE_URL` wins when set; otherwise the DSN is built from the libpq
    style PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE variables.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    host = os.environ.get("PGHOST", "").strip() or "localhost"
    port = _env_int("PGPORT", 5432)
    user = os.environ.get("PGUSER", "").strip() or "postgres"
    password = os.environ.get("PGPASSWORD", "")
    database = os.environ.get("PGDATABASE", "").strip() or "postgres"

    credentials = quote(user, safe="")
    if password:
        credentials += ":" + quote(password, safe="")
    return f"postgresql://{credentials}@{host}:{port}/{quote(database, safe='')}"


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), 1, pool_min_size())


def command_timeout() -> float:
    return _env_float("DB_COMMAND_TIMEOUT", 30.0)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    try:
        _pool = await asyncpg.create_pool(
            dsn=database_url(),
            min_size=pool_min_size(),
            max_size=pool_max_size(),
            command_timeout=command_timeout(),
        )
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
        raise InitializationError(f"Could not connect to the database: {exc}") from exc


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


@asynccontextmanager
async def _connection(op: str) -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire one pooled connection and translate driver errors.

    The connection goes back to the pool on every exit path.
    """
    try:
        async with pool().acquire(timeout=command_timeout()) as conn:
            yield conn
    except asyncpg.ForeignKeyViolationError as exc:
        # Callers decide what a dangling reference means for them.
        logger.info("store_reference_violation op=%s constraint=%s", op, getattr(exc, "constraint_name", None))
        raise ReferenceViolation(str(exc)) from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
        logger.exception("store_error op=%s", op)
        raise StoreError(f"{op} failed.") from exc


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    async with _connection("fetch_one") as conn:
        row = await conn.fetchrow(sql, *args, timeout=command_timeout())
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    async with _connection("fetch_all") as conn:
        rows = await conn.fetch(sql, *args, timeout=command_timeout())
    return [_record_to_dict(r) for r in rows]


async def fetch_value(sql: str, *args: Any) -> Any:
    async with _connection("fetch_value") as conn:
        return await conn.fetchval(sql, *args, timeout=command_timeout())


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    async with _connection("execute") as conn:
        await conn.execute(sql, *args, timeout=command_timeout())
