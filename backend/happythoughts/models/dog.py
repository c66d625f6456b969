"""
Happy Thoughts API — Dog SQLAlchemy Model
==========================================

What:  ORM model for the `dogs` table. Structurally the same as Thought:
       a few descriptive attributes, a like counter, a creation timestamp,
       and an optional weak reference to the user who added it.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from happythoughts.database import Base


class Dog(Base):
    __tablename__ = "dogs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Looked up case-insensitively by GET /dogs/name/{name}
    name: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    breed: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str] = mapped_column(String(30), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    vaccinated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True, default=None)

    __table_args__ = (
        Index("idx_dogs_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Dog(id={self.id}, name='{self.name}', breed='{self.breed}')>"
