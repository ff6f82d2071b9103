"""Prompt endpoints: browsing, authoring and engagement."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user, get_optional_user, parse_id
from app.core import messages
from app.core.database import get_db
from app.models.user import User
from app.prompts.crud import PromptCRUD, PromptFilters, parse_filter
from app.prompts.enums import ALL_FILTER, Category, Purpose, SortMode
from app.prompts.schemas import (
    CommentCreate,
    CommentResponse,
    LikesResponse,
    PromptCreate,
    PromptDeletedResponse,
    PromptResponse,
    PromptRestoredResponse,
    PromptUpdate,
    UsageResponse,
)


router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("", response_model=List[PromptResponse])
def list_prompts(
    category: Optional[str] = Query(None),
    purpose: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    user: Optional[str] = Query(None),
    sort: SortMode = Query(SortMode.LATEST),
    limit: int = Query(0),
    show_deleted: bool = Query(False, alias="showDeleted"),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    filters = PromptFilters(
        category=parse_filter(Category, category, messages.PROMPT_INVALID_CATEGORY),
        purpose=parse_filter(Purpose, purpose, messages.PROMPT_INVALID_PURPOSE),
        search=search,
        user_id=parse_id(user) if user and user != ALL_FILTER else None,
        sort=sort,
        limit=limit,
    )
    if show_deleted and viewer is not None:
        if viewer.is_admin:
            filters.include_deleted = True
        else:
            filters.deleted_visible_to = viewer.id
    return PromptCRUD.list_prompts(db, filters)


@router.get("/{prompt_id}", response_model=PromptResponse)
def get_prompt(
    prompt_id: str,
    show_deleted: bool = Query(False, alias="showDeleted"),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    return PromptCRUD.get_for_viewer(db, parse_id(prompt_id), viewer, show_deleted)


@router.post("", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
def create_prompt(
    payload: PromptCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PromptCRUD.create(
        db,
        owner_id=current_user.id,
        title=payload.title,
        content=payload.content,
        category=payload.category,
        purpose=payload.purpose,
        service=payload.service,
        model=payload.model,
        tags=payload.tags,
    )


@router.put("/{prompt_id}", response_model=PromptResponse)
def update_prompt(
    prompt_id: str,
    payload: PromptUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Partial update by the owner; `isDeleted` may be toggled here as well."""
    return PromptCRUD.update(db, parse_id(prompt_id), current_user.id, **payload.model_dump())


@router.delete("/{prompt_id}", response_model=PromptDeletedResponse)
def delete_prompt(
    prompt_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prompt = PromptCRUD.soft_delete(db, parse_id(prompt_id), current_user.id)
    return PromptDeletedResponse(message=messages.PROMPT_DELETED, deleted_at=prompt.deleted_at)


@router.put("/restore/{prompt_id}", response_model=PromptRestoredResponse)
def restore_prompt(
    prompt_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    PromptCRUD.restore(db, parse_id(prompt_id), current_user.id)
    return PromptRestoredResponse(message=messages.PROMPT_RESTORED)


@router.put("/like/{prompt_id}", response_model=LikesResponse)
def toggle_like(
    prompt_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    likes = PromptCRUD.toggle_like(db, parse_id(prompt_id), current_user.id)
    return LikesResponse(likes=likes)


@router.post("/comment/{prompt_id}", response_model=List[CommentResponse])
def add_comment(
    prompt_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PromptCRUD.add_comment(db, parse_id(prompt_id), current_user.id, payload.content)


@router.delete("/comment/{prompt_id}/{comment_id}", response_model=List[CommentResponse])
def delete_comment(
    prompt_id: str,
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Allowed for the comment's author and for the prompt's owner."""
    return PromptCRUD.delete_comment(
        db, parse_id(prompt_id), parse_id(comment_id), current_user.id
    )


@router.put("/use/{prompt_id}", response_model=UsageResponse)
def use_prompt(prompt_id: str, db: Session = Depends(get_db)):
    # Anyone may record a use, signed in or not
    usage_count = PromptCRUD.increment_usage(db, parse_id(prompt_id))
    return UsageResponse(usage_count=usage_count)
