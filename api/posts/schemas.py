"""
Post API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field

# Upper bound of a SERIAL (int4) key.
MAX_POST_ID = 2_147_483_647

PostId = Annotated[int, Path(ge=1, le=MAX_POST_ID, description="Post identifier")]


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class CreatePostResponse(BaseModel):
    postId: int


class PostResponse(BaseModel):
    id: int
    teacher_id: int
    title: str
    content: str
    timestamp: datetime
