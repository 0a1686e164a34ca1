# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the news endpoints."""

from datetime import datetime
from typing import List, Optional

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class NewsCreate(ApiModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None  # DRAFT unless given
    image_url: Optional[str] = None


class NewsUpdate(NewsCreate):
    pass


# -- Responses -------------------------------------------------------------


class NewsResponse(ApiModel):
    id: int
    title: str
    content: str
    category: str
    image_url: Optional[str] = None
    author: str
    author_id: Optional[int] = None
    status: str
    published_date: datetime
    created_at: datetime
    updated_at: datetime


class NewsListResponse(ApiModel):
    news: List[NewsResponse]
    pagination: Pagination
