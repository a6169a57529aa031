"""
Post business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import RequestValidationFailed, field_error

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_post_response(row: dict) -> schemas.PostResponse:
    return schemas.PostResponse(
        id=int(row["id"]),
        teacher_id=int(row["teacher_id"]),
        title=str(row["title"]),
        content=str(row["content"]),
        timestamp=row["timestamp"],
    )


async def create_post(*, teacher_id: int, title: str, content: str) -> schemas.CreatePostResponse:
    title = (title or "").strip()
    content = (content or "").strip()

    errors = []
    if not title:
        errors.append(field_error("title", "title is required."))
    if not content:
        errors.append(field_error("content", "content is required."))
    if errors:
        raise RequestValidationFailed(errors)

    row = await repository.insert_post(teacher_id=teacher_id, title=title, content=content)
    post_id = int(row["id"])
    logger.info("post_created post_id=%s teacher_id=%s", post_id, teacher_id)
    return schemas.CreatePostResponse(postId=post_id)


async def get_post(post_id: int) -> schemas.PostResponse:
    row = await repository.get_post(post_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.")
    return _to_post_response(row)


async def list_posts() -> list[schemas.PostResponse]:
    rows = await repository.list_posts()
    return [_to_post_response(row) for row in rows]
