"""Pydantic schemas for Profiles and authentication."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class SignUp(BaseModel):
    email: str
    password: str
    service: str


class SignIn(BaseModel):
    email: str
    password: str


class ProfileOut(BaseModel):
    profile_id: str
    email: str
    service: str
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileSummary(BaseModel):
    """The slice of a Profile shown next to a request."""

    email: str
    service: str

    model_config = {"from_attributes": True}


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: ProfileOut
