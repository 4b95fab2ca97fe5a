import logging
import uuid
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.database import get_db
from app.core.security import verify_password, get_password_hash, create_access_token
from app.models.user import User
from app.models.password_reset import PasswordResetRequest
from app.schemas.user import (
    LoginRequest, LoginResponse, PasswordResetRequestIn, PasswordResetIn, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

RESET_REQUESTED_MESSAGE = "Password reset instructions sent if email exists."


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Вход по email и паролю, возвращает JWT"""
    user = db.query(User).filter(User.email == credentials.email).first()
    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")

    user.last_login_at = datetime.utcnow()
    db.commit()

    token = create_access_token({"sub": user.user_id, "name": user.name, "role": user.role})
    return {"token": token, "user": user}


@router.post("/password-reset-request", response_model=MessageResponse)
def password_reset_request(data: PasswordResetRequestIn, db: Session = Depends(get_db)):
    """Запрос на сброс пароля. Ответ одинаковый, есть пользователь или нет"""
    user = db.query(User).filter(User.email == data.email).first()
    if user:
        reset = PasswordResetRequest(
            user_id=user.user_id,
            reset_token=str(uuid.uuid4()),
            created_at=datetime.utcnow(),
            expires_at=datetime.utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES),
            consumed=False
        )
        db.add(reset)
        db.commit()
        logger.info("Password reset request %s created for user %s", reset.request_id, user.user_id)
    return {"message": RESET_REQUESTED_MESSAGE}


@router.post("/password-reset", response_model=MessageResponse)
def password_reset(data: PasswordResetIn, db: Session = Depends(get_db)):
    """Установить новый пароль по токену сброса"""
    reset = db.query(PasswordResetRequest).filter(
        PasswordResetRequest.reset_token == data.reset_token
    ).first()
    if not reset:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid reset token")
    if reset.consumed:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reset token already used")
    if reset.expires_at < datetime.utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reset token expired")

    user = db.query(User).filter(User.user_id == reset.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid reset token")

    user.password_hash = get_password_hash(data.new_password)
    reset.consumed = True
    db.commit()
    return {"message": "Password successfully updated."}
