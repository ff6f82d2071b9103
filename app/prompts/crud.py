"""Prompt store: lifecycle, listing and engagement operations."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import String, cast, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import messages
from app.core.errors import Forbidden, InvalidState, NotFound, ValidationError
from app.models.prompt import Prompt, PromptComment, PromptLike
from app.models.user import User
from .enums import ALL_FILTER, DEFAULT_SERVICE, Category, Purpose, SortMode


logger = logging.getLogger("app.prompts.crud")

E = TypeVar("E", bound=Enum)

UPDATABLE_FIELDS = ("title", "content", "category", "purpose", "service", "model", "tags")


def coerce_enum(enum_cls: Type[E], value: Any, message: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)


def parse_filter(enum_cls: Type[E], value: Optional[str], message: str) -> Optional[E]:
    """Query-string filter value; empty or "all" means no filter."""
    if value is None or value == "" or value == ALL_FILTER:
        return None
    return coerce_enum(enum_cls, value, message)


def _required_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(messages.PROMPT_FIELD_REQUIRED.format(field=field))
    return value


def _clean_tags(tags: Optional[Iterable[str]]) -> List[str]:
    return [tag.strip() for tag in (tags or []) if tag and tag.strip()]


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass
class PromptFilters:
    """Listing options; deleted prompts are hidden unless one of the last two fields grants them."""
    category: Optional[Category] = None
    purpose: Optional[Purpose] = None
    search: Optional[str] = None
    user_id: Optional[uuid.UUID] = None
    sort: SortMode = SortMode.LATEST
    limit: int = 0
    include_deleted: bool = False
    deleted_visible_to: Optional[uuid.UUID] = None


class PromptCRUD:
    """CRUD operations for prompts."""

    @staticmethod
    def get_by_id(db: Session, prompt_id: uuid.UUID, include_deleted: bool = False) -> Prompt:
        """Get prompt by ID; soft-deleted prompts count as missing unless included."""
        prompt = db.get(Prompt, prompt_id)
        if prompt is None or (prompt.is_deleted and not include_deleted):
            raise NotFound(messages.PROMPT_NOT_FOUND)
        return prompt

    @staticmethod
    def get_for_viewer(
        db: Session,
        prompt_id: uuid.UUID,
        viewer: Optional[User],
        show_deleted: bool = False,
    ) -> Prompt:
        """Get a prompt; a deleted one is only shown to its owner or an admin who asked for it."""
        prompt = PromptCRUD.get_by_id(db, prompt_id, include_deleted=show_deleted and viewer is not None)
        if prompt.is_deleted and not (viewer.is_admin or prompt.user_id == viewer.id):
            raise NotFound(messages.PROMPT_NOT_FOUND)
        return prompt

    @staticmethod
    def _get_owned(db: Session, prompt_id: uuid.UUID, caller_id: uuid.UUID) -> Prompt:
        prompt = PromptCRUD.get_by_id(db, prompt_id, include_deleted=True)
        if prompt.user_id != caller_id:
            raise Forbidden(messages.ERROR_PERMISSION_DENIED)
        return prompt

    @staticmethod
    def list_prompts(db: Session, filters: PromptFilters) -> List[Prompt]:
        query = db.query(Prompt)

        if not filters.include_deleted:
            if filters.deleted_visible_to is not None:
                query = query.filter(
                    or_(Prompt.is_deleted.is_(False), Prompt.user_id == filters.deleted_visible_to)
                )
            else:
                query = query.filter(Prompt.is_deleted.is_(False))

        if filters.category is not None:
            query = query.filter(Prompt.category == filters.category.value)
        if filters.purpose is not None:
            query = query.filter(Prompt.purpose == filters.purpose.value)
        if filters.user_id is not None:
            query = query.filter(Prompt.user_id == filters.user_id)

        terms = (filters.search or "").split()
        if terms:
            tags_text = cast(Prompt.tags, String)
            query = query.filter(
                or_(
                    *(
                        or_(
                            Prompt.title.ilike(_like_pattern(term), escape="\\"),
                            Prompt.content.ilike(_like_pattern(term), escape="\\"),
                            tags_text.ilike(_like_pattern(term), escape="\\"),
                        )
                        for term in terms
                    )
                )
            )

        if filters.sort == SortMode.POPULAR:
            query = query.order_by(Prompt.usage_count.desc())
        elif filters.sort == SortMode.TRENDING:
            like_count = (
                select(func.count())
                .select_from(PromptLike)
                .where(PromptLike.prompt_id == Prompt.id)
                .correlate(Prompt)
                .scalar_subquery()
            )
            query = query.order_by(like_count.desc())
        elif filters.sort == SortMode.FEATURED:
            query = query.filter(Prompt.is_featured.is_(True))
        query = query.order_by(Prompt.created_at.desc(), Prompt.id)

        if filters.limit > 0:
            query = query.limit(filters.limit)

        return query.all()

    @staticmethod
    def create(
        db: Session,
        owner_id: uuid.UUID,
        title: Optional[str],
        content: Optional[str],
        category: Any,
        purpose: Any,
        service: Optional[str] = None,
        model: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Prompt:
        """Create a prompt owned by ``owner_id``."""
        title = _required_text(title, "タイトル").strip()
        content = _required_text(content, "内容")
        if category is None:
            raise ValidationError(messages.PROMPT_FIELD_REQUIRED.format(field="カテゴリ"))
        if purpose is None:
            raise ValidationError(messages.PROMPT_FIELD_REQUIRED.format(field="用途"))
        category = coerce_enum(Category, category, messages.PROMPT_INVALID_CATEGORY)
        purpose = coerce_enum(Purpose, purpose, messages.PROMPT_INVALID_PURPOSE)

        prompt = Prompt(
            title=title,
            content=content,
            user_id=owner_id,
            category=category.value,
            purpose=purpose.value,
            service=(service or "").strip() or DEFAULT_SERVICE,
            model=model.strip() if model else model,
            tags=_clean_tags(tags),
            usage_count=0,
            is_featured=False,
            is_deleted=False,
            deleted_at=None,
        )
        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        logger.info("Prompt created", extra={"prompt_id": str(prompt.id), "user_id": str(owner_id)})
        return prompt

    @staticmethod
    def update(db: Session, prompt_id: uuid.UUID, caller_id: uuid.UUID, **updates: Any) -> Prompt:
        """Merge the supplied fields into an owned prompt.

        ``None`` values are ignored. ``is_deleted`` is applied only when
        supplied, and keeps ``deleted_at`` in step with it.
        """
        prompt = PromptCRUD._get_owned(db, prompt_id, caller_id)

        for key in UPDATABLE_FIELDS:
            value = updates.get(key)
            if value is None:
                continue
            if key == "title":
                value = _required_text(value, "タイトル").strip()
            elif key == "content":
                value = _required_text(value, "内容")
            elif key == "category":
                value = coerce_enum(Category, value, messages.PROMPT_INVALID_CATEGORY).value
            elif key == "purpose":
                value = coerce_enum(Purpose, value, messages.PROMPT_INVALID_PURPOSE).value
            elif key == "service":
                value = value.strip() or DEFAULT_SERVICE
            elif key == "tags":
                value = _clean_tags(value)
            setattr(prompt, key, value)

        is_deleted = updates.get("is_deleted")
        if is_deleted is False:
            prompt.is_deleted = False
            prompt.deleted_at = None
        elif is_deleted is True and not prompt.is_deleted:
            prompt.is_deleted = True
            prompt.deleted_at = datetime.now(timezone.utc)

        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        return prompt

    @staticmethod
    def soft_delete(db: Session, prompt_id: uuid.UUID, caller_id: uuid.UUID) -> Prompt:
        """Mark an owned prompt deleted. Bookmarks and authorship are left in place."""
        prompt = PromptCRUD._get_owned(db, prompt_id, caller_id)
        if not prompt.is_deleted:
            prompt.is_deleted = True
            prompt.deleted_at = datetime.now(timezone.utc)
            db.add(prompt)
            db.commit()
            db.refresh(prompt)
            logger.info("Prompt soft-deleted", extra={"prompt_id": str(prompt.id)})
        return prompt

    @staticmethod
    def restore(db: Session, prompt_id: uuid.UUID, caller_id: uuid.UUID) -> Prompt:
        prompt = PromptCRUD._get_owned(db, prompt_id, caller_id)
        if not prompt.is_deleted:
            raise InvalidState(messages.PROMPT_NOT_DELETED)

        prompt.is_deleted = False
        prompt.deleted_at = None
        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        logger.info("Prompt restored", extra={"prompt_id": str(prompt.id)})
        return prompt

    @staticmethod
    def toggle_like(db: Session, prompt_id: uuid.UUID, user_id: uuid.UUID) -> List[uuid.UUID]:
        """Add ``user_id`` to the like set if absent, remove it if present."""
        prompt = PromptCRUD.get_by_id(db, prompt_id)

        removed = db.execute(
            delete(PromptLike).where(
                PromptLike.prompt_id == prompt.id,
                PromptLike.user_id == user_id,
            )
        ).rowcount
        if not removed:
            db.add(PromptLike(prompt_id=prompt.id, user_id=user_id))
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request inserted the same like first
            db.rollback()
        return prompt.likes

    @staticmethod
    def add_comment(
        db: Session, prompt_id: uuid.UUID, author_id: uuid.UUID, content: Optional[str]
    ) -> List[PromptComment]:
        prompt = PromptCRUD.get_by_id(db, prompt_id)
        if content is None or not content.strip():
            raise ValidationError(messages.COMMENT_CONTENT_REQUIRED)

        db.add(PromptComment(prompt_id=prompt.id, user_id=author_id, content=content.strip()))
        db.commit()
        return prompt.comments

    @staticmethod
    def delete_comment(
        db: Session, prompt_id: uuid.UUID, comment_id: uuid.UUID, caller_id: uuid.UUID
    ) -> List[PromptComment]:
        """Remove a comment; allowed for its author or the prompt owner."""
        prompt = PromptCRUD.get_by_id(db, prompt_id, include_deleted=True)
        comment = (
            db.query(PromptComment)
            .filter(
                PromptComment.id == comment_id,
                PromptComment.prompt_id == prompt.id,
            )
            .first()
        )
        if comment is None:
            raise NotFound(messages.COMMENT_NOT_FOUND)
        if caller_id not in (comment.user_id, prompt.user_id):
            raise Forbidden(messages.ERROR_PERMISSION_DENIED)

        db.delete(comment)
        db.commit()
        return prompt.comments

    @staticmethod
    def increment_usage(db: Session, prompt_id: uuid.UUID) -> int:
        result = db.execute(
            update(Prompt)
            .where(Prompt.id == prompt_id, Prompt.is_deleted.is_(False))
            .values(usage_count=Prompt.usage_count + 1)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            db.rollback()
            raise NotFound(messages.PROMPT_NOT_FOUND)
        db.commit()
        return db.scalar(select(Prompt.usage_count).where(Prompt.id == prompt_id))
