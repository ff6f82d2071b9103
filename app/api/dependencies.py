from __future__ import annotations

import uuid
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.core import messages
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import Unauthenticated, ValidationError
from app.core.security import verify_token
from app.models.user import User


token_header = APIKeyHeader(name=settings.AUTH_HEADER_NAME, auto_error=False)


def get_current_user(
    token: Annotated[Optional[str], Depends(token_header)],
    db: Session = Depends(get_db),
) -> User:
    user_id = verify_token(token)
    user: User | None = db.get(User, user_id)
    if user is None:
        # Account removed after the token was issued
        raise Unauthenticated(messages.AUTH_TOKEN_INVALID)
    return user


def get_optional_user(
    token: Annotated[Optional[str], Depends(token_header)],
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Caller if a valid token was sent; anonymous otherwise.

    Stale or invalid tokens fall back to anonymous so public reads keep working.
    """
    if not token:
        return None
    try:
        user_id = verify_token(token)
    except Unauthenticated:
        return None
    return db.get(User, user_id)


def parse_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError):
        raise ValidationError(messages.VALIDATION_INVALID_ID)
