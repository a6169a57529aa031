"""
Comment persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def insert_comment(*, post_id: int, student_id: int, content: str, sentiment: str) -> dict:
    """
    Insert one comment.

    A missing post surfaces as `core.errors.ReferenceViolation` from the
    `comments.post_id` foreign key.
    """
    row = await db.fetch_one(
        """
        INSERT INTO comments (post_id, student_id, content, timestamp, sentiment)
        VALUES ($1, $2, $3, now(), $4)
        RETURNING id, post_id, student_id, content, timestamp, sentiment
        """,
        post_id,
        student_id,
        content,
        sentiment,
    )
    if row is None:
        raise RuntimeError("Failed to insert comment.")
    return row


async def list_comments_for_post(post_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, post_id, student_id, content, timestamp, sentiment
        FROM comments
        WHERE post_id = $1
        ORDER BY timestamp ASC, id ASC
        """,
        post_id,
    )
