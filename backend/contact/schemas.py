# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for contact and callback requests."""

from datetime import datetime
from typing import List, Optional

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class ContactCreate(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class CallbackCreate(ApiModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    preferred_time: Optional[str] = None
    message: Optional[str] = None


class FollowUpUpdate(ApiModel):
    """Staff follow-up, shared by both request kinds."""

    status: Optional[str] = None
    notes: Optional[str] = None


# -- Responses -------------------------------------------------------------


class ContactResponse(ApiModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ContactListResponse(ApiModel):
    contacts: List[ContactResponse]
    pagination: Pagination


class CallbackResponse(ApiModel):
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    preferred_time: Optional[str] = None
    message: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class CallbackListResponse(ApiModel):
    callbacks: List[CallbackResponse]
    pagination: Pagination
