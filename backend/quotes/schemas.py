# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the quote endpoints."""

from datetime import datetime
from typing import List, Optional, Union

from core.responses import ApiModel, Pagination


# -- Requests --------------------------------------------------------------


class QuoteCreate(ApiModel):
    customer_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    product_type: Optional[str] = None
    amount: Optional[float] = None
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_year: Optional[Union[int, str]] = None  # forms send either
    vehicle_reg_no: Optional[str] = None
    notes: Optional[str] = None
    expiry_date: Optional[datetime] = None


class QuoteUpdate(QuoteCreate):
    status: Optional[str] = None


# -- Responses -------------------------------------------------------------


class QuoteResponse(ApiModel):
    id: int
    customer_name: str
    email: str
    phone: str
    product_type: str
    amount: float
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_year: Optional[str] = None
    vehicle_reg_no: Optional[str] = None
    notes: Optional[str] = None
    expiry_date: datetime
    status: str
    created_at: datetime
    updated_at: datetime


class QuoteListResponse(ApiModel):
    quotes: List[QuoteResponse]
    pagination: Pagination
