"""Account models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class User(BaseModel):
    """Stored customer account"""
    id: str
    email: str
    full_name: Optional[str] = None
    role: str = "customer"
    password_hash: str
    created_at: datetime


class UserPublic(BaseModel):
    """Account fields safe to send to clients"""
    id: str = Field(alias="_id")
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    role: str

    class Config:
        populate_by_name = True

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=user.id, email=user.email, full_name=user.full_name, role=user.role)


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    full_name: Optional[str] = Field(default=None, alias="fullName")

    class Config:
        populate_by_name = True


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    """Issued bearer token with the authenticated user"""
    user: UserPublic
    token: str
    token_type: str = Field(default="bearer", alias="tokenType")

    class Config:
        populate_by_name = True
