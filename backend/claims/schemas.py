# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the claim endpoints."""

from datetime import datetime
from typing import List, Optional

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class ClaimCreate(ApiModel):
    customer_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[float] = None
    policy_number: Optional[str] = None
    incident_date: Optional[datetime] = None
    incident_location: Optional[str] = None
    description: Optional[str] = None
    documents: Optional[List[str]] = None


class ClaimUpdate(ClaimCreate):
    status: Optional[str] = None
    notes: Optional[str] = None


# -- Responses -------------------------------------------------------------


class ClaimResponse(ApiModel):
    id: int
    customer_name: str
    email: str
    phone: str
    type: str
    amount: float
    policy_number: Optional[str] = None
    incident_date: Optional[datetime] = None
    incident_location: Optional[str] = None
    description: str
    notes: Optional[str] = None
    documents: List[str] = []
    status: str
    created_at: datetime
    updated_at: datetime


class ClaimListResponse(ApiModel):
    claims: List[ClaimResponse]
    pagination: Pagination
