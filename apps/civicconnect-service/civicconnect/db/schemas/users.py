import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from civicconnect.utils.roles import RoleEnum


def _clean_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    s = value.strip().lower()
    if not s:
        return None
    if "@" not in s or s.startswith("@") or s.endswith("@"):
        raise ValueError("invalid email address")
    return s


def _clean_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    s = "".join(value.split())
    return s or None


class UserBase(BaseModel):
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=6, max_length=128)
    phone: Optional[str] = None
    display_name: Optional[str] = Field(default=None, max_length=80)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        cleaned = _clean_email(v)
        if not cleaned:
            raise ValueError("email is required")
        return cleaned

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: Optional[str]) -> Optional[str]:
        return _clean_phone(v)


class StaffCreate(UserCreate):
    role: RoleEnum = RoleEnum.ADMIN

    @field_validator("role")
    @classmethod
    def _staff_role(cls, v: RoleEnum) -> RoleEnum:
        if v == RoleEnum.CITIZEN:
            raise ValueError("staff accounts must be ADMIN or OFFICIAL")
        return v


class UserUpdate(BaseModel):
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = Field(default=None, max_length=80)
    fcm_token: Optional[str] = None
    role: Optional[RoleEnum] = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: Optional[str]) -> Optional[str]:
        return _clean_email(v)

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: Optional[str]) -> Optional[str]:
        return _clean_phone(v)


class User(UserBase):
    user_id: uuid.UUID
    provider: str
    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
