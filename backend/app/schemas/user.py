from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from app.models.user import UserRole


class UserResponse(BaseModel):
    user_id: str
    name: str
    email: EmailStr
    role: UserRole
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class UserBrief(BaseModel):
    user_id: str
    name: str
    role: UserRole

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: UserBrief


class PasswordResetRequestIn(BaseModel):
    email: EmailStr


class PasswordResetIn(BaseModel):
    reset_token: str
    new_password: str = Field(..., min_length=6)


class MessageResponse(BaseModel):
    message: str
