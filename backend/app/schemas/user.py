"""
User Schemas
Pydantic models for registration, login and profile data.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    email: EmailStr
    full_name: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Password and confirmation password do not match")
        return self


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    token: str


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("The new password and confirmation password do not match")
        return self


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: str
    profile_picture_url: Optional[str] = None
    email_confirmed: bool
    roles: List[str]
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "ProfileResponse":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            profile_picture_url=user.profile_picture,
            email_confirmed=user.email_confirmed,
            roles=user.role_names,
            created_at=user.created_at,
        )


class UserSummary(BaseModel):
    id: str
    email: str
    full_name: str
    email_confirmed: bool
    roles: List[str]
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            email_confirmed=user.email_confirmed,
            roles=user.role_names,
            created_at=user.created_at,
        )
