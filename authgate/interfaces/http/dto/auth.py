from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=16, max_length=64)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Username cannot be blank")
        return value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=16, max_length=64)


class CurrentUserDTO(BaseModel):
    id: int
    username: str
    created_at: datetime
    updated_at: datetime | None = None


class AuthSuccessDTO(BaseModel):
    ok: bool = True
