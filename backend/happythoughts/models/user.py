"""
Happy Thoughts API — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table.
Who:   UserService (register, login, token lookup) and the auth gate.

Columns:
    - username / email: unique; email is stored lower-cased
    - password_hash: passlib bcrypt digest, never the plaintext
    - access_token: 128 hex characters from security.generate_access_token(),
      assigned when the row is constructed and never rotated. The unique index
      turns an (astronomically unlikely) collision into a failed insert.

Users are created at registration and read at login and on every
authenticated request; this API never updates or deletes them.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from happythoughts.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    username: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    access_token: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        # no credentials in the repr
        return f"<User(id={self.id}, username='{self.username}')>"
