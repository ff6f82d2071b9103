"""CRUD operations for user accounts, follows and bookmarks."""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import messages
from app.core.config import settings
from app.core.errors import Conflict, InvalidArgument, InvalidCredentials, NotFound, ValidationError
from app.core.security import (
    BCRYPT_MAX_BYTES,
    DUMMY_PASSWORD_HASH,
    get_password_hash,
    verify_password,
)
from app.models.user import SavedPrompt, User, UserFollow, UserRole
from app.models.prompt import Prompt


logger = logging.getLogger("app.users.crud")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserCRUD:
    """CRUD operations for users."""

    @staticmethod
    def get_by_id(db: Session, user_id: uuid.UUID) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFound(messages.USER_NOT_FOUND)
        return user

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    @staticmethod
    def _conflict_message(db: Session, username: str, email: str) -> Optional[str]:
        existing = (
            db.query(User)
            .filter(or_(User.username == username, func.lower(User.email) == email))
            .first()
        )
        if existing is None:
            return None
        if existing.username == username:
            return messages.REG_USERNAME_EXISTS
        return messages.REG_EMAIL_EXISTS

    @staticmethod
    def register(
        db: Session,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create an account; the password is stored only as a bcrypt hash."""
        username = (username or "").strip()
        email = normalize_email(email or "")
        if len(username) < settings.USERNAME_MIN_LENGTH:
            raise ValidationError(
                messages.REG_USERNAME_TOO_SHORT.format(min_length=settings.USERNAME_MIN_LENGTH)
            )
        if len(password or "") < settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                messages.REG_PASSWORD_TOO_SHORT.format(min_length=settings.PASSWORD_MIN_LENGTH)
            )
        max_bytes = min(settings.PASSWORD_MAX_BYTES, BCRYPT_MAX_BYTES)
        if len(password.encode("utf-8")) > max_bytes:
            raise ValidationError(messages.REG_PASSWORD_TOO_LONG.format(max_bytes=max_bytes))

        conflict = UserCRUD._conflict_message(db, username, email)
        if conflict:
            raise Conflict(conflict)

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            role=role.value,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            db.rollback()
            raise Conflict(UserCRUD._conflict_message(db, username, email) or messages.REG_USERNAME_EXISTS)
        db.refresh(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> User:
        """Return the user for a correct email/password pair.

        Unknown email and wrong password raise the same ``InvalidCredentials``.
        """
        user = UserCRUD.get_by_email(db, email or "")
        if user is None:
            verify_password(password or "", DUMMY_PASSWORD_HASH)
            logger.info("Login failed: unknown account")
            raise InvalidCredentials(messages.AUTH_INVALID_CREDENTIALS)
        if not verify_password(password or "", user.password_hash):
            logger.info("Login failed: bad password", extra={"user_id": str(user.id)})
            raise InvalidCredentials(messages.AUTH_INVALID_CREDENTIALS)
        return user

    @staticmethod
    def update_profile(
        db: Session,
        user_id: uuid.UUID,
        username: Optional[str] = None,
        bio: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> User:
        """Partial profile update; ``None`` or an empty string leaves a field unchanged."""
        user = UserCRUD.get_by_id(db, user_id)

        if username:
            username = username.strip()
            if len(username) < settings.USERNAME_MIN_LENGTH:
                raise ValidationError(
                    messages.REG_USERNAME_TOO_SHORT.format(min_length=settings.USERNAME_MIN_LENGTH)
                )
            taken = (
                db.query(User)
                .filter(User.username == username, User.id != user.id)
                .first()
            )
            if taken:
                raise Conflict(messages.REG_USERNAME_EXISTS)
            user.username = username
        if bio:
            user.bio = bio
        if avatar:
            user.avatar = avatar

        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict(messages.REG_USERNAME_EXISTS)
        db.refresh(user)
        return user

    @staticmethod
    def toggle_follow(db: Session, user_id: uuid.UUID, target_id: uuid.UUID) -> Tuple[User, User]:
        """Follow ``target_id`` if not yet following, otherwise unfollow.

        Returns the caller and the target after the change.
        """
        if user_id == target_id:
            raise InvalidArgument(messages.USER_CANNOT_FOLLOW_SELF)
        target = UserCRUD.get_by_id(db, target_id)
        user = UserCRUD.get_by_id(db, user_id)

        removed = db.execute(
            delete(UserFollow).where(
                UserFollow.follower_id == user.id,
                UserFollow.followed_id == target.id,
            )
        ).rowcount
        if not removed:
            db.add(UserFollow(follower_id=user.id, followed_id=target.id))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
        return user, target

    @staticmethod
    def toggle_save_prompt(db: Session, user_id: uuid.UUID, prompt_id: uuid.UUID) -> User:
        """Bookmark a prompt, or remove the bookmark. Deleted prompts can still be unsaved."""
        if db.get(Prompt, prompt_id) is None:
            raise NotFound(messages.PROMPT_NOT_FOUND)
        user = UserCRUD.get_by_id(db, user_id)

        removed = db.execute(
            delete(SavedPrompt).where(
                SavedPrompt.user_id == user.id,
                SavedPrompt.prompt_id == prompt_id,
            )
        ).rowcount
        if not removed:
            db.add(SavedPrompt(user_id=user.id, prompt_id=prompt_id))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
        return user

    @staticmethod
    def list_saved_prompts(db: Session, user_id: uuid.UUID) -> List[Prompt]:
        """Bookmarked prompts, newest first. Soft-deleted prompts stay listed."""
        return (
            db.query(Prompt)
            .join(SavedPrompt, SavedPrompt.prompt_id == Prompt.id)
            .filter(SavedPrompt.user_id == user_id)
            .order_by(Prompt.created_at.desc())
            .all()
        )

    @staticmethod
    def list_following_prompts(db: Session, user_id: uuid.UUID) -> List[Prompt]:
        """Prompts by followed users, newest first."""
        return (
            db.query(Prompt)
            .join(UserFollow, UserFollow.followed_id == Prompt.user_id)
            .filter(
                UserFollow.follower_id == user_id,
                Prompt.is_deleted.is_(False),
            )
            .order_by(Prompt.created_at.desc())
            .all()
        )
