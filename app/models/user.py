from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampedUUIDModel, utcnow

if TYPE_CHECKING:
    from .prompt import Prompt


class UserRole(str, enum.Enum):
    """Account roles."""
    USER = "user"
    ADMIN = "admin"


class UserFollow(Base):
    """One row per follow edge; the follower's `following` and the target's `followers` both read it."""

    __tablename__ = "user_follows"
    __table_args__ = (CheckConstraint("follower_id <> followed_id", name="ck_user_follows_not_self"),)

    follower_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    followed_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class SavedPrompt(Base):
    """Bookmark of a prompt by a user."""

    __tablename__ = "user_saved_prompts"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    prompt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prompts.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class User(TimestampedUUIDModel):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    # Stored lower-cased so the unique index is case-insensitive
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str] = mapped_column(Text, default="", nullable=False)
    avatar: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)

    prompts: Mapped[list[Prompt]] = relationship(
        back_populates="user", order_by="Prompt.created_at"
    )
    following_links: Mapped[list[UserFollow]] = relationship(
        foreign_keys=[UserFollow.follower_id], order_by=UserFollow.created_at, viewonly=True
    )
    follower_links: Mapped[list[UserFollow]] = relationship(
        foreign_keys=[UserFollow.followed_id], order_by=UserFollow.created_at, viewonly=True
    )
    saved_links: Mapped[list[SavedPrompt]] = relationship(
        order_by=SavedPrompt.created_at, viewonly=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def prompt_ids(self) -> list[uuid.UUID]:
        return [prompt.id for prompt in self.prompts]

    @property
    def following_ids(self) -> list[uuid.UUID]:
        return [link.followed_id for link in self.following_links]

    @property
    def follower_ids(self) -> list[uuid.UUID]:
        return [link.follower_id for link in self.follower_links]

    @property
    def saved_prompt_ids(self) -> list[uuid.UUID]:
        return [link.prompt_id for link in self.saved_links]
