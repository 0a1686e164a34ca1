# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the user administration endpoints."""

from datetime import datetime
from typing import List, Optional

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class CreateUserRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None  # defaults to USER


class UpdateUserRequest(ApiModel):
    is_active: Optional[bool] = None
    role: Optional[str] = None


# -- Responses -------------------------------------------------------------


class UserRow(ApiModel):
    id: int
    name: Optional[str] = None
    email: str
    role: str
    is_active: bool
    phone: Optional[str] = None
    image: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserListResponse(ApiModel):
    users: List[UserRow]
    pagination: Pagination
