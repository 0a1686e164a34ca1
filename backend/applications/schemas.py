# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the job application endpoints."""

from datetime import datetime
from typing import List, Optional, Union

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class ApplicationCreate(ApiModel):
    applicant_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    current_company: Optional[str] = None
    expected_salary: Optional[Union[int, float, str]] = None
    available_from: Optional[datetime] = None
    cover_letter: Optional[str] = None
    skills: Optional[List[str]] = None
    references: Optional[str] = None
    cv_url: Optional[str] = None


class ApplicationUpdate(ApiModel):
    # Review fields only; the submission itself is never edited
    status: Optional[str] = None
    interview_date: Optional[datetime] = None
    interview_notes: Optional[str] = None


# -- Responses -------------------------------------------------------------


class ApplicationResponse(ApiModel):
    id: int
    applicant_name: str
    email: str
    phone: str
    position: str
    experience: str
    education: str
    current_company: Optional[str] = None
    expected_salary: Optional[str] = None
    available_from: datetime
    cover_letter: str
    skills: List[str] = []
    references: Optional[str] = None
    cv_url: Optional[str] = None
    interview_date: Optional[datetime] = None
    interview_notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ApplicationListResponse(ApiModel):
    applications: List[ApplicationResponse]
    pagination: Pagination
