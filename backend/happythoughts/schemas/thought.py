"""
Happy Thoughts API — Thought Request/Response Schemas
======================================================

What:  Pydantic models for the /thoughts endpoints.
How:   ThoughtCreate / ThoughtUpdate carry the declared constraints (length
       bounds, required message, enumerated category). FastAPI validates the
       request body against them before the service runs; PATCH bodies are
       validated with the same bounds.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

MESSAGE_MIN_LENGTH = 5
MESSAGE_MAX_LENGTH = 140


class ThoughtCategory(str, Enum):
    HAPPY = "happy"
    GRATEFUL = "grateful"
    FUNNY = "funny"
    INSPIRING = "inspiring"
    CALM = "calm"


class ThoughtCreate(BaseModel):
    """Body of POST /thoughts."""

    message: str = Field(
        min_length=MESSAGE_MIN_LENGTH,
        max_length=MESSAGE_MAX_LENGTH,
        description="The happy thought (5-140 characters)",
    )
    category: ThoughtCategory = Field(
        default=ThoughtCategory.HAPPY,
        description="One of: happy, grateful, funny, inspiring, calm",
    )

    # mode="before" so the length bounds apply to the trimmed message
    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v):
        return v.strip() if isinstance(v, str) else v


class ThoughtUpdate(BaseModel):
    """Body of PATCH /thoughts/{id}. Omitted fields are left unchanged."""

    message: Optional[str] = Field(
        default=None,
        min_length=MESSAGE_MIN_LENGTH,
        max_length=MESSAGE_MAX_LENGTH,
    )
    category: Optional[ThoughtCategory] = None
    hearts: Optional[int] = Field(default=None, ge=0)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v):
        return v.strip() if isinstance(v, str) else v


class ThoughtResponse(BaseModel):
    id: uuid.UUID = Field(description="Store-assigned identifier")
    message: str
    hearts: int = Field(description="Number of likes")
    category: ThoughtCategory
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    user_id: Optional[uuid.UUID] = Field(
        default=None,
        description="Author's user id, null for anonymous thoughts",
    )

    model_config = {"from_attributes": True}
