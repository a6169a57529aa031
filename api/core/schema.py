"""
Schema bootstrap.

Runs once per process start (see `api/main.py`). Each relation is checked
through `information_schema` and created only when missing, so running it
against an initialized database is a no-op.
"""

from __future__ import annotations

import logging

from . import db
from .errors import InitializationError, StoreError

logger = logging.getLogger(__name__)

# Creation order matters: comments references posts.
TABLES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "posts",
        (
            """
            CREATE TABLE IF NOT EXISTS posts (
                id SERIAL PRIMARY KEY,
                teacher_id INTEGER NOT NULL,
                title VARCHAR(255) NOT NULL,
                content TEXT NOT NULL,
                timestamp TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """,
        ),
    ),
    (
        "comments",
        (
            """
            CREATE TABLE IF NOT EXISTS comments (
                id SERIAL PRIMARY KEY,
                post_id INTEGER NOT NULL REFERENCES posts(id) ON DELETE CASCADE,
                student_id INTEGER NOT NULL,
                content TEXT NOT NULL,
                timestamp TIMESTAMPTZ NOT NULL DEFAULT now(),
                sentiment VARCHAR(50) NOT NULL
                    CHECK (sentiment IN ('positive', 'negative', 'neutral'))
            )
            """,
            "CREATE INDEX IF NOT EXISTS comments_post_id_idx ON comments (post_id)",
        ),
    ),
)


async def table_exists(table_name: str) -> bool:
    return bool(
        await db.fetch_value(
            """
            SELECT EXISTS (
                SELECT 1
                FROM information_schema.tables
                WHERE table_schema = 'public'
                  AND table_name = $1
            )
            """,
            table_name,
        )
    )


async def ensure_schema() -> list[str]:
    """
    Create any missing table and return the names of the ones created.

    Raises `InitializationError` on any store failure; startup must not
    continue against a half-initialized schema.
    """
    created: list[str] = []
    try:
        for table_name, statements in TABLES:
            if await table_exists(table_name):
                continue
            logger.info("schema_table_missing table=%s", table_name)
            for statement in statements:
                await db.execute(statement)
            created.append(table_name)
            logger.info("schema_table_created table=%s", table_name)
    except StoreError as exc:
        raise InitializationError(f"Schema bootstrap failed: {exc}") from exc

    logger.info("schema_ready created=%s", ",".join(created) or "none")
    return created
