# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Contact-form and callback-request endpoints.

Both forms are public.  Staff work through them in the dashboard, setting
a status and free-text follow-up notes.
"""

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
    bad_request,
    clean_optional,
    require_choice,
    require_email,
    require_fields,
    sanitize_input,
    updated_text,
    validate_phone,
)
from models.contact import CALLBACK_STATUSES, CONTACT_STATUSES, CallbackRequest, ContactRequest
from contact.schemas import (
    CallbackCreate,
    CallbackListResponse,
    CallbackResponse,
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    FollowUpUpdate,
)

router = APIRouter(prefix="/api/contact", tags=["contact"])
callback_router = APIRouter(prefix="/api/callback", tags=["contact"])


def _apply_follow_up(record, body: FollowUpUpdate, statuses) -> set:
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")
    if "status" in fields:
        record.status = require_choice(body.status, statuses)
    if "notes" in fields:
        record.notes = updated_text(body.notes)
    return fields


# ---------------------------------------------------------------------------
# /api/contact
# ---------------------------------------------------------------------------


@router.get("", response_model=Envelope[ContactListResponse])
def list_contacts(
    status_: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    q = db.query(ContactRequest)
    if status_:
        q = q.filter(ContactRequest.status == require_choice(status_, CONTACT_STATUSES))
    q = search_filter(q, search, ContactRequest.name, ContactRequest.email, ContactRequest.subject)

    contacts, pagination = paginate(q, params, ContactRequest.created_at.desc(), ContactRequest.id.desc())
    return ok(ContactListResponse(contacts=contacts, pagination=pagination))


@router.post("", response_model=Envelope[ContactResponse], status_code=status.HTTP_201_CREATED)
def create_contact(body: ContactCreate, db: Session = Depends(get_db)):
    """Contact form (public)."""
    require_fields(body.name, body.email, body.subject, body.message)
    email = require_email(body.email)

    contact = ContactRequest(
        name=sanitize_input(body.name),
        email=email,
        phone=clean_optional(body.phone),
        subject=sanitize_input(body.subject),
        message=sanitize_input(body.message),
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("Contact request id=%s received", contact.id)
    return ok(contact)


@router.get("/{contact_id}", response_model=Envelope[ContactResponse])
def get_contact(
    contact_id: int,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    return ok(get_or_404(db, ContactRequest, contact_id, "Contact request"))


@router.patch("/{contact_id}", response_model=Envelope[ContactResponse])
def update_contact(
    contact_id: int,
    body: FollowUpUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    contact = get_or_404(db, ContactRequest, contact_id, "Contact request")
    fields = _apply_follow_up(contact, body, CONTACT_STATUSES)
    db.commit()
    db.refresh(contact)
    logger.info("user_id=%s updated contact request id=%s (%s)", current.id, contact.id, ", ".join(sorted(fields)))
    return ok(contact)


@router.delete("/{contact_id}", response_model=Envelope[Message])
def delete_contact(
    contact_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, ContactRequest, contact_id, "Contact request", current.id)
    return ok(Message(message="Contact request deleted successfully"))


# ---------------------------------------------------------------------------
# /api/callback
# ---------------------------------------------------------------------------


@callback_router.get("", response_model=Envelope[CallbackListResponse])
def list_callbacks(
    status_: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    q = db.query(CallbackRequest)
    if status_:
        q = q.filter(CallbackRequest.status == require_choice(status_, CALLBACK_STATUSES))
    q = search_filter(q, search, CallbackRequest.name, CallbackRequest.phone)

    callbacks, pagination = paginate(q, params, CallbackRequest.created_at.desc(), CallbackRequest.id.desc())
    return ok(CallbackListResponse(callbacks=callbacks, pagination=pagination))


@callback_router.post("", response_model=Envelope[CallbackResponse], status_code=status.HTTP_201_CREATED)
def create_callback(body: CallbackCreate, db: Session = Depends(get_db)):
    """Call-back form (public).  Only a name and a phone number are needed."""
    require_fields(body.name, body.phone)
    phone = sanitize_input(body.phone)
    if not validate_phone(phone):
        raise bad_request("Invalid phone number format")
    email = require_email(body.email) if clean_optional(body.email) else None

    callback = CallbackRequest(
        name=sanitize_input(body.name),
        phone=phone,
        email=email,
        preferred_time=clean_optional(body.preferred_time),
        message=clean_optional(body.message),
    )
    db.add(callback)
    db.commit()
    db.refresh(callback)
    logger.info("Callback request id=%s received", callback.id)
    return ok(callback)


@callback_router.get("/{callback_id}", response_model=Envelope[CallbackResponse])
def get_callback(
    callback_id: int,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    return ok(get_or_404(db, CallbackRequest, callback_id, "Callback request"))


@callback_router.patch("/{callback_id}", response_model=Envelope[CallbackResponse])
def update_callback(
    callback_id: int,
    body: FollowUpUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    callback = get_or_404(db, CallbackRequest, callback_id, "Callback request")
    fields = _apply_follow_up(callback, body, CALLBACK_STATUSES)
    db.commit()
    db.refresh(callback)
    logger.info("user_id=%s updated callback request id=%s (%s)", current.id, callback.id, ", ".join(sorted(fields)))
    return ok(callback)


@callback_router.delete("/{callback_id}", response_model=Envelope[Message])
def delete_callback(
    callback_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, CallbackRequest, callback_id, "Callback request", current.id)
    return ok(Message(message="Callback request deleted successfully"))
