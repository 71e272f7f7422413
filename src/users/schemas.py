# This file defines request and response schemas for the users service.
# No response model carries the password column.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    username: str
    password: str
    email: str


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    username: str = ""
    password: str = ""


class UserProfile(BaseModel):
    id: int
    username: str
    email: str


class UserCreated(BaseModel):
    id: int


class LoginResponse(BaseModel):
    id: int
    username: str
    message: str = "User logged in."
