"""
models/chirp.py — Chirp table definition.

No business logic. No imports from services or routes.

FK policy: user_id ON DELETE CASCADE — a user's chirps go with the user
(POST /admin/reset truncates users).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chirpstack.app.extensions import db

MAX_CHIRP_LENGTH = 140


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Chirp(db.Model):
    __tablename__ = "chirps"

    __table_args__ = (
        CheckConstraint(
            f"LENGTH(body) <= {MAX_CHIRP_LENGTH}",
            name="ck_chirps_body_length",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    # Stored after profanity filtering.
    body: Mapped[str] = mapped_column(
        String(MAX_CHIRP_LENGTH),
        nullable=False,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Python-side default keeps microsecond resolution for ordering.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    # ── Relationships ──────────────────────────────────────────────────────

    author: Mapped["User"] = relationship(  # noqa: F821
        "User",
        back_populates="chirps",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Chirp id={self.id} user_id={self.user_id}>"
