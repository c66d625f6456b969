"""
Happy Thoughts API — Thought SQLAlchemy Model
==============================================

What:  ORM model for the `thoughts` table.
Who:   ThoughtService (CRUD, likes, filtering), the seeder, and Alembic.

Table Design:
    - UUID primary key assigned on insert, never changed afterwards
    - message: 5-140 characters (enforced by the API schema)
    - hearts: like counter, only ever changed by an atomic increment or PATCH
    - category: one of the ThoughtCategory values, stored as plain text
    - user_id: weak reference to the author (no foreign key, no cascade)
    - created_at: UTC, indexed for newest-first listing and date filters
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from happythoughts.database import Base


class Thought(Base):
    """
    A short happy message that other visitors can heart.

    Lifecycle:
        1. Created by POST /thoughts (hearts = 0)
        2. Hearted by POST /thoughts/{id}/like, edited by PATCH
        3. Removed by DELETE
    """

    __tablename__ = "thoughts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    message: Mapped[str] = mapped_column(
        String(140),
        nullable=False,
    )

    hearts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="happy",
        server_default=text("'happy'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Id of the user who posted the thought; stays behind if that user disappears.
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_thoughts_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Thought(id={self.id}, category='{self.category}', hearts={self.hearts})>"
