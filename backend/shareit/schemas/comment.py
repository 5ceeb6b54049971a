"""
Pydantic schemas for item comments.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=1000)

    @field_validator("text")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment text must not be blank")
        return value


class CommentResponse(BaseModel):
    id: int
    text: str
    author_name: str
    created: datetime

    model_config = {"from_attributes": True}
