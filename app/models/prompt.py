"""Prompt, comment and like models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.prompts.enums import DEFAULT_SERVICE
from .base import Base, TimestampedUUIDModel, utcnow
from .user import User


class PromptLike(Base):
    """Membership row of a user in a prompt's like set."""

    __tablename__ = "prompt_likes"

    prompt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prompts.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class PromptComment(TimestampedUUIDModel):
    __tablename__ = "prompt_comments"

    prompt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prompts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[User] = relationship(lazy="joined")


class Prompt(TimestampedUUIDModel):
    """A shared prompt; soft-deleted via is_deleted/deleted_at, never removed."""

    __tablename__ = "prompts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    category: Mapped[str] = mapped_column(String(50), nullable=False)
    purpose: Mapped[str] = mapped_column(String(50), nullable=False)
    service: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_SERVICE)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list
    )

    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Soft delete
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship(back_populates="prompts", lazy="joined")
    like_links: Mapped[list[PromptLike]] = relationship(
        order_by=PromptLike.created_at, lazy="selectin", viewonly=True
    )
    comments: Mapped[list[PromptComment]] = relationship(
        order_by=PromptComment.created_at, lazy="selectin", viewonly=True
    )

    @property
    def likes(self) -> list[uuid.UUID]:
        return [link.user_id for link in self.like_links]
