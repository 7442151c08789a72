from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import normalize_email

UserRole = Literal["admin", "pharmacist"]


class UserRegister(BaseModel):
    username: str = Field(min_length=3)
    email: str
    password: str = Field(min_length=6)
    role: UserRole = "pharmacist"

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value):
        return normalize_email(value)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value):
        return value.strip().lower()


class UserUpdate(BaseModel):
    username: Optional[str] = Field(default=None, min_length=3)
    email: Optional[str] = None
    role: Optional[UserRole] = None
    password: Optional[str] = Field(default=None, min_length=6)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value):
        return normalize_email(value)


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole
    token: str
    token_type: str = "bearer"
