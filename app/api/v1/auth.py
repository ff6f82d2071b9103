import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user
from app.core.database import get_db
from app.core.security import issue_token
from app.models.user import User
from app.users.crud import UserCRUD
from app.users.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse


logger = logging.getLogger("app.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = UserCRUD.register(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return TokenResponse(token=issue_token(user.id))


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = UserCRUD.authenticate(db, payload.email, payload.password)
    logger.info("User logged in", extra={"user_id": str(user.id)})
    return TokenResponse(token=issue_token(user.id))


@router.get("/me", response_model=UserResponse, response_model_by_alias=True)
def read_me(current_user: User = Depends(get_current_user)):
    """The caller's own record, email included."""
    return current_user
