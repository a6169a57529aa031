"""
Comment API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .sentiment import Sentiment


class CreateCommentRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1)


class CreateCommentResponse(BaseModel):
    message: str = "Comment added with sentiment analysis."
    commentId: int
    sentiment: Sentiment


class CommentResponse(BaseModel):
    id: int
    post_id: int
    student_id: int
    content: str
    timestamp: datetime
    sentiment: Sentiment
