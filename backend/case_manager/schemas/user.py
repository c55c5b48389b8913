from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    username: str
    email: Optional[str] = None
    full_name: Optional[str] = None


class UserCreate(UserBase):
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Username cannot be blank")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        # Kept as typed; only an all-whitespace password is refused
        if not value.strip():
            raise ValueError("Password cannot be blank")
        return value


class UserResponse(UserBase):
    id: int
    name: str
    is_active: bool
    is_admin: bool
    created_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    username: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str
