"""Pydantic schemas for auth and user endpoints."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.core.schemas import CamelModel


class RegisterRequest(CamelModel):
    username: str = Field(..., max_length=50)
    email: EmailStr
    password: str


class LoginRequest(CamelModel):
    # Plain str: a malformed email must fail like any other bad credential
    email: str
    password: str


class TokenResponse(CamelModel):
    token: str


class ProfileUpdate(CamelModel):
    username: Optional[str] = Field(None, max_length=50)
    bio: Optional[str] = Field(None, max_length=1000)
    avatar: Optional[str] = Field(None, max_length=500)


class PublicUserResponse(CamelModel):
    """Profile visible to anyone; never carries email or password."""
    id: uuid.UUID = Field(serialization_alias="_id")
    username: str
    bio: str
    avatar: str
    role: str
    prompts: List[uuid.UUID] = Field(validation_alias="prompt_ids")
    saved_prompts: List[uuid.UUID] = Field(validation_alias="saved_prompt_ids")
    following: List[uuid.UUID] = Field(validation_alias="following_ids")
    followers: List[uuid.UUID] = Field(validation_alias="follower_ids")
    created_at: datetime
    updated_at: datetime


class UserResponse(PublicUserResponse):
    """The caller's own record."""
    email: str


class FollowResponse(CamelModel):
    following: List[uuid.UUID]
    followers: List[uuid.UUID]


class SavedPromptsResponse(CamelModel):
    saved_prompts: List[uuid.UUID]
