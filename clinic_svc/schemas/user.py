"""
Pydantic schemas for account registration and login.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for a registration attempt.

    Fields are optional here; the account service reports missing ones.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "firstName": "Ana",
                "username": "ana1",
                "email": "ana@x.com",
                "password": "pw123",
                "confirmPassword": "pw123"
            }
        },
    )

    first_name: Optional[str] = Field(None, alias="firstName")
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(None, alias="confirmPassword")


class LoginRequest(BaseModel):
    """Schema for a login attempt."""
    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "ana@x.com", "password": "pw123"}}
    )

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public view of a user. The password hash is never part of it."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique user identifier")
    first_name: str = Field(..., alias="firstName")
    username: str
    email: str
    created_at: str = Field(..., alias="createdAt", description="UTC ISO 8601 registration time")


class LoginResponse(BaseModel):
    """Successful login acknowledgment."""
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Plain acknowledgment."""
    message: str
