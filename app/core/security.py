from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import uuid

import bcrypt
from jose import JWTError, jwt

from .config import settings
from .errors import Unauthenticated
from . import messages

# bcrypt ignores everything past the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72

ACCESS_TOKEN_TYPE = "access"


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # No stored hash can come from a longer secret; truncating would accept suffix edits
    if password_too_long(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    if password_too_long(password):
        raise ValueError(f"Password exceeds {BCRYPT_MAX_BYTES} bytes")
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


# Verified against when a login names an unknown email, so both paths cost one bcrypt check.
DUMMY_PASSWORD_HASH = get_password_hash(uuid.uuid4().hex)


def create_token(
    subject: str | Any,
    expires_delta: Optional[timedelta],
    token_type: str,
    jti: Optional[str] = None,
) -> str:
    if isinstance(subject, str):
        sub = subject
    else:
        sub = str(subject)

    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    payload: dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "type": token_type,
        "jti": jti or uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def issue_token(user_id: uuid.UUID | str) -> str:
    """Signed session token for ``user_id``, valid for ACCESS_TOKEN_EXPIRE_DAYS."""
    expires = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    return create_token(user_id, expires, token_type=ACCESS_TOKEN_TYPE)


def decode_token(token: str, expected_type: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
        if payload.get("type") != expected_type:
            raise JWTError("Invalid token type")
        return payload
    except JWTError as exc:
        raise JWTError("Invalid or expired token") from exc


def verify_token(token: str | None) -> uuid.UUID:
    """Resolve a session token to the user id it was issued for.

    Raises ``Unauthenticated`` when the token is absent, malformed, expired,
    signed with another secret, or does not carry a user id.
    """
    if not token:
        raise Unauthenticated(messages.AUTH_TOKEN_MISSING)

    try:
        payload = decode_token(token, expected_type=ACCESS_TOKEN_TYPE)
    except JWTError:
        raise Unauthenticated(messages.AUTH_TOKEN_INVALID)

    try:
        return uuid.UUID(str(payload.get("sub")))
    except (ValueError, TypeError):
        raise Unauthenticated(messages.AUTH_TOKEN_INVALID)
