"""
Post persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def insert_post(*, teacher_id: int, title: str, content: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO posts (teacher_id, title, content, timestamp)
        VALUES ($1, $2, $3, now())
        RETURNING id, teacher_id, title, content, timestamp
        """,
        teacher_id,
        title,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to insert post.")
    return row


async def get_post(post_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, teacher_id, title, content, timestamp
        FROM posts
        WHERE id = $1
        """,
        post_id,
    )


async def list_posts() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, teacher_id, title, content, timestamp
        FROM posts
        ORDER BY timestamp ASC, id ASC
        """
    )
