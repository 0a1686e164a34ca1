# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth and profile endpoints."""

from datetime import datetime
from typing import Optional

from core.responses import ApiModel


# -- Requests --------------------------------------------------------------


class SignInRequest(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None


class ProfileUpdateRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ChangePasswordRequest(ApiModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


# -- Responses -------------------------------------------------------------


class SessionInfo(ApiModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str
    is_active: bool


class SignInResponse(ApiModel):
    access_token: str
    token_type: str  # always "bearer"
    user: SessionInfo


class UserInfoResponse(ApiModel):
    id: int
    name: Optional[str] = None
    email: str
    role: str
    is_active: bool
    phone: Optional[str] = None
    image: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime


class HasPasswordResponse(ApiModel):
    has_password: bool


class SignInErrorInfo(ApiModel):
    code: str
    message: str
