# src/kukey_core/models/user.py
"""SQLAlchemy models for users, their point balance and characters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kukey_core.db.session import Base
from kukey_core.db.types import IdType


class User(Base):
    """Account row holding the point balance and the review-reading entitlement."""

    __tablename__ = "user_account"
    __table_args__ = (
        CheckConstraint("point >= 0", name="ck_user_point_non_negative"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    # Mutated only through the point ledger.
    point: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Course reviews are readable until this instant; NULL means never purchased.
    viewable_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    character: Mapped[Character | None] = relationship(
        "Character",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )


class Character(Base):
    """Per-user character evolved and re-skinned through the item shop."""

    __tablename__ = "character"
    __table_args__ = (
        CheckConstraint("level >= 0", name="ck_character_level_non_negative"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped[User] = relationship("User", back_populates="character")
