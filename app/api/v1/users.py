from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user, parse_id
from app.core.database import get_db
from app.models.user import User
from app.prompts.schemas import PromptResponse
from app.users.crud import UserCRUD
from app.users.schemas import (
    FollowResponse,
    ProfileUpdate,
    PublicUserResponse,
    SavedPromptsResponse,
    UserResponse,
)


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/saved/prompts", response_model=List[PromptResponse])
def list_saved_prompts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UserCRUD.list_saved_prompts(db, current_user.id)


@router.get("/following/prompts", response_model=List[PromptResponse])
def list_following_prompts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UserCRUD.list_following_prompts(db, current_user.id)


@router.get("/{user_id}", response_model=PublicUserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Public profile; email is never included."""
    return UserCRUD.get_by_id(db, parse_id(user_id))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # Empty form fields leave the stored value unchanged
    return UserCRUD.update_profile(
        db,
        current_user.id,
        username=payload.username,
        bio=payload.bio,
        avatar=payload.avatar,
    )


@router.put("/follow/{user_id}", response_model=FollowResponse)
def toggle_follow(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user, target = UserCRUD.toggle_follow(db, current_user.id, parse_id(user_id))
    return FollowResponse(following=user.following_ids, followers=target.follower_ids)


@router.put("/save/{prompt_id}", response_model=SavedPromptsResponse)
def toggle_save_prompt(
    prompt_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = UserCRUD.toggle_save_prompt(db, current_user.id, parse_id(prompt_id))
    return SavedPromptsResponse(saved_prompts=user.saved_prompt_ids)
