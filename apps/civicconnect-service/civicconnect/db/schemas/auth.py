from typing import Optional
from pydantic import BaseModel, Field, model_validator

from .users import User, _clean_phone


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None

    @model_validator(mode="after")
    def _normalize(self):
        self.phone = _clean_phone(self.phone)
        if self.email is not None:
            self.email = self.email.strip().lower() or None
        return self

    @property
    def is_phone_login(self) -> bool:
        return bool(self.phone)

    @property
    def is_password_login(self) -> bool:
        return bool(self.email and self.password)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str = Field(min_length=6, max_length=128)
