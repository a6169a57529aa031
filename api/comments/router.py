"""
Comment API endpoints (nested under a post).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from posts.schemas import PostId

from . import schemas, service

router = APIRouter(prefix="/api/posts/{post_id}/comments")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreateCommentResponse,
)
async def create_comment(
    post_id: PostId,
    request: schemas.CreateCommentRequest,
    student_id: int = Depends(auth_dependencies.get_current_actor_id),
) -> schemas.CreateCommentResponse:
    return await service.create_comment(
        post_id=post_id,
        student_id=student_id,
        content=request.content,
    )


@router.get("", response_model=list[schemas.CommentResponse])
async def list_comments(post_id: PostId) -> list[schemas.CommentResponse]:
    return await service.list_comments(post_id)
