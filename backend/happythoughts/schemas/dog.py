"""
Happy Thoughts API — Dog Request/Response Schemas
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class DogCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    breed: str = Field(min_length=1, max_length=50)
    color: str = Field(min_length=1, max_length=30)
    age: Optional[int] = Field(default=None, ge=0, le=30, description="Age in years")
    vaccinated: bool = False

    @field_validator("name", "breed", "color", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class DogUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    breed: Optional[str] = Field(default=None, min_length=1, max_length=50)
    color: Optional[str] = Field(default=None, min_length=1, max_length=30)
    age: Optional[int] = Field(default=None, ge=0, le=30)
    vaccinated: Optional[bool] = None
    likes: Optional[int] = Field(default=None, ge=0)

    @field_validator("name", "breed", "color", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class DogResponse(BaseModel):
    id: uuid.UUID
    name: str
    breed: str
    color: str
    age: Optional[int] = None
    vaccinated: bool
    likes: int
    created_at: datetime
    user_id: Optional[uuid.UUID] = None

    model_config = {"from_attributes": True}
