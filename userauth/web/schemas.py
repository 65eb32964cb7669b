"""
Pydantic schemas for API request/response validation.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field


# ==================== REQUEST MODELS ====================


class Gender(str, Enum):
    """Profile gender enum."""

    male = "male"
    female = "female"
    other = "other"


class RegisterRequest(BaseModel):
    """User registration request."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    gender: Optional[Gender] = None


class LoginRequest(BaseModel):
    """User login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ResendVerificationRequest(BaseModel):
    """Resend verification email request."""

    email: EmailStr


# ==================== RESPONSE MODELS ====================


class UserProfile(BaseModel):
    """Public profile returned on registration."""

    email: str
    subscription: str
    gender: Optional[str] = None
    avatarURL: Optional[str] = None


class RegisterResponse(BaseModel):
    user: UserProfile


class SessionUser(BaseModel):
    email: str
    subscription: str


class LoginResponse(BaseModel):
    token: str
    user: SessionUser


class MessageResponse(BaseModel):
    message: str


# ==================== HELPER FUNCTIONS ====================


def message_response(message: str) -> dict:
    """Create the ``{"message": ...}`` body used by error and info responses."""
    return {"message": message}


def success_response(data: Any = None, message: str = None) -> dict:
    """Create a standardized success response dict."""
    response = {"success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    return response
