"""
Comment business logic.

Scope:
- validate comment content
- tag each new comment with `sentiment.classify(content)`
- map a dangling post reference to 404
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import ReferenceViolation, RequestValidationFailed, field_error

from . import repository, schemas, sentiment

logger = logging.getLogger(__name__)


def _to_comment_response(row: dict) -> schemas.CommentResponse:
    return schemas.CommentResponse(
        id=int(row["id"]),
        post_id=int(row["post_id"]),
        student_id=int(row["student_id"]),
        content=str(row["content"]),
        timestamp=row["timestamp"],
        sentiment=sentiment.Sentiment(str(row["sentiment"])),
    )


async def create_comment(*, post_id: int, student_id: int, content: str) -> schemas.CreateCommentResponse:
    content = (content or "").strip()
    if not content:
        raise RequestValidationFailed([field_error("content", "content is required.")])

    label = sentiment.classify(content)
    try:
        row = await repository.insert_comment(
            post_id=post_id,
            student_id=student_id,
            content=content,
            sentiment=label.value,
        )
    except ReferenceViolation as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.") from exc

    comment_id = int(row["id"])
    logger.info(
        "comment_created comment_id=%s post_id=%s student_id=%s sentiment=%s",
        comment_id,
        post_id,
        student_id,
        label.value,
    )
    return schemas.CreateCommentResponse(commentId=comment_id, sentiment=label)


async def list_comments(post_id: int) -> list[schemas.CommentResponse]:
    # An unknown post simply has no comments.
    rows = await repository.list_comments_for_post(post_id)
    return [_to_comment_response(row) for row in rows]
