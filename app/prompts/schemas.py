"""Pydantic schemas for prompt endpoints."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.core.schemas import CamelModel, UserSummary
from .enums import Category, Purpose


class PromptCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: Category
    purpose: Purpose
    service: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    tags: List[str] = Field(default_factory=list)


class PromptUpdate(CamelModel):
    """Partial update; omitted or null fields keep their stored value."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[Category] = None
    purpose: Optional[Purpose] = None
    service: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    tags: Optional[List[str]] = None
    is_deleted: Optional[bool] = None


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(CamelModel):
    id: uuid.UUID = Field(serialization_alias="_id")
    author: UserSummary = Field(serialization_alias="userId")
    content: str
    created_at: datetime


class PromptResponse(CamelModel):
    id: uuid.UUID = Field(serialization_alias="_id")
    title: str
    content: str
    user: UserSummary
    category: str
    purpose: str
    service: str
    model: Optional[str] = None
    tags: List[str]
    likes: List[uuid.UUID]
    comments: List[CommentResponse]
    usage_count: int
    is_featured: bool
    is_deleted: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PromptDeletedResponse(CamelModel):
    message: str
    deleted_at: datetime
    is_deleted: bool = True


class PromptRestoredResponse(CamelModel):
    message: str
    is_deleted: bool = False


class LikesResponse(CamelModel):
    likes: List[uuid.UUID]


class UsageResponse(CamelModel):
    usage_count: int
