# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the downloadable document endpoints."""

from datetime import datetime
from typing import List, Optional, Union

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class DocumentCreate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[Union[int, str]] = None  # bytes or a display string
    file_type: Optional[str] = None
    status: Optional[str] = None


class DocumentUpdate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


# -- Responses -------------------------------------------------------------


class DocumentResponse(ApiModel):
    id: int
    title: str
    description: str
    category: str
    file_url: str
    file_size: str
    file_type: str
    downloads: int
    uploaded_by: str
    uploader_id: Optional[int] = None
    status: str
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(ApiModel):
    documents: List[DocumentResponse]
    pagination: Pagination
