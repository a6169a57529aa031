"""
Post API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/api/posts")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreatePostResponse,
)
async def create_post(
    request: schemas.CreatePostRequest,
    teacher_id: int = Depends(auth_dependencies.get_current_actor_id),
) -> schemas.CreatePostResponse:
    return await service.create_post(
        teacher_id=teacher_id,
        title=request.title,
        content=request.content,
    )


@router.get("", response_model=list[schemas.PostResponse])
async def list_posts() -> list[schemas.PostResponse]:
    """
    All posts, oldest first.
    """
    return await service.list_posts()


@router.get("/{post_id}", response_model=schemas.PostResponse)
async def get_post(post_id: schemas.PostId) -> schemas.PostResponse:
    return await service.get_post(post_id)
