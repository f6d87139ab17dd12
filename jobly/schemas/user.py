"""
Pydantic schemas for users, authentication and applications.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration. New accounts are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: EmailStr

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins adding a user, who may be an admin."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(BaseModel):
    """Partial user update. Username and admin flag cannot be changed here."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="firstName")
    last_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="lastName")
    email: Optional[EmailStr] = None

    @field_validator("password", "first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserLoginRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")

    class Config:
        populate_by_name = True


class UserDetailResponse(UserResponse):
    """User profile plus the ids of jobs applied to."""
    jobs: List[int] = []


class UserEnvelope(BaseModel):
    user: UserResponse


class UserDetailEnvelope(BaseModel):
    user: UserDetailResponse


class UserListEnvelope(BaseModel):
    users: List[UserResponse]


class UserCreatedResponse(BaseModel):
    user: UserResponse
    token: str


class UserDeletedResponse(BaseModel):
    deleted: str


class ApplicationResponse(BaseModel):
    applied: int


class CurrentUser(BaseModel):
    """Caller identity decoded from a bearer token."""
    username: str
    is_admin: bool = False
