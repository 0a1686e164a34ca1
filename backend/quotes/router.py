# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Quote endpoints – public quote requests, staff follow-up in the dashboard."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.logger import logger
from core.pagination import PageParams, page_params, paginate, search_filter
from core.records import delete_or_404, get_or_404
from core.responses import Envelope, Message, ok
from core.roles import ADMIN
from core.security import SessionUser, require_auth
from core.validation import (
    as_text,
    bad_request,
    clean_optional,
    require_choice,
    require_email,
    require_fields,
    sanitize_input,
    updated_text,
)
from models.quote import QUOTE_STATUSES, Quote
from quotes.schemas import QuoteCreate, QuoteListResponse, QuoteResponse, QuoteUpdate

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


@router.get("", response_model=Envelope[QuoteListResponse])
def list_quotes(
    status_: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    q = db.query(Quote)
    if status_:
        q = q.filter(Quote.status == require_choice(status_, QUOTE_STATUSES))
    q = search_filter(q, search, Quote.customer_name, Quote.email, Quote.product_type)

    quotes, pagination = paginate(q, params, Quote.created_at.desc(), Quote.id.desc())
    return ok(QuoteListResponse(quotes=quotes, pagination=pagination))


@router.post("", response_model=Envelope[QuoteResponse], status_code=status.HTTP_201_CREATED)
def create_quote(body: QuoteCreate, db: Session = Depends(get_db)):
    """Request a quote (public).  New quotes start ACTIVE."""
    require_fields(body.customer_name, body.email, body.phone, body.product_type, body.amount, body.expiry_date)
    email = require_email(body.email)

    quote = Quote(
        customer_name=sanitize_input(body.customer_name),
        email=email,
        phone=sanitize_input(body.phone),
        product_type=sanitize_input(body.product_type),
        amount=body.amount,
        vehicle_make=clean_optional(body.vehicle_make),
        vehicle_model=clean_optional(body.vehicle_model),
        vehicle_year=clean_optional(as_text(body.vehicle_year)),
        vehicle_reg_no=clean_optional(body.vehicle_reg_no),
        notes=clean_optional(body.notes),
        expiry_date=body.expiry_date,
    )
    db.add(quote)
    db.commit()
    db.refresh(quote)
    logger.info("Quote id=%s requested (%s)", quote.id, quote.product_type)
    return ok(quote)


@router.get("/{quote_id}", response_model=Envelope[QuoteResponse])
def get_quote(
    quote_id: int,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    return ok(get_or_404(db, Quote, quote_id, "Quote"))


@router.put("/{quote_id}", response_model=Envelope[QuoteResponse])
def update_quote(
    quote_id: int,
    body: QuoteUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """Partial update.  Vehicle details and notes are cleared by null."""
    quote = get_or_404(db, Quote, quote_id, "Quote")
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")

    if "customer_name" in fields:
        quote.customer_name = updated_text(body.customer_name, required=True)
    if "email" in fields:
        require_fields(body.email)
        quote.email = require_email(body.email)
    if "phone" in fields:
        quote.phone = updated_text(body.phone, required=True)
    if "product_type" in fields:
        quote.product_type = updated_text(body.product_type, required=True)
    if "amount" in fields:
        require_fields(body.amount)
        quote.amount = body.amount
    if "expiry_date" in fields:
        require_fields(body.expiry_date)
        quote.expiry_date = body.expiry_date
    if "status" in fields:
        quote.status = require_choice(body.status, QUOTE_STATUSES)
    if "vehicle_make" in fields:
        quote.vehicle_make = updated_text(body.vehicle_make)
    if "vehicle_model" in fields:
        quote.vehicle_model = updated_text(body.vehicle_model)
    if "vehicle_year" in fields:
        quote.vehicle_year = updated_text(as_text(body.vehicle_year))
    if "vehicle_reg_no" in fields:
        quote.vehicle_reg_no = updated_text(body.vehicle_reg_no)
    if "notes" in fields:
        quote.notes = updated_text(body.notes)

    db.commit()
    db.refresh(quote)
    logger.info("user_id=%s updated quote id=%s (%s)", current.id, quote.id, ", ".join(sorted(fields)))
    return ok(quote)


@router.delete("/{quote_id}", response_model=Envelope[Message])
def delete_quote(
    quote_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, Quote, quote_id, "Quote", current.id)
    return ok(Message(message="Quote deleted successfully"))
