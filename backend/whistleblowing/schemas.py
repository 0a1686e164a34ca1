# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the whistleblowing endpoints."""

from datetime import datetime
from typing import List, Optional

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class ReportCreate(ApiModel):
    type: Optional[str] = None
    priority: Optional[str] = None
    is_anonymous: bool = False
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
    reporter_phone: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    witness_details: Optional[str] = None
    documents: Optional[List[str]] = None


class ReportUpdate(ApiModel):
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    action_taken: Optional[str] = None
    investigation_notes: Optional[str] = None


# -- Responses -------------------------------------------------------------


class ReportResponse(ApiModel):
    id: int
    type: str
    priority: str
    is_anonymous: bool
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
    reporter_phone: Optional[str] = None
    description: str
    location: Optional[str] = None
    witness_details: Optional[str] = None
    documents: List[str] = []
    assigned_to: Optional[str] = None
    action_taken: Optional[str] = None
    investigation_notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ReportListResponse(ApiModel):
    reports: List[ReportResponse]
    pagination: Pagination
