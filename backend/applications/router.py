# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Job application endpoints.  Candidates apply from the careers page without
an account; HR moves the application through review in the dashboard.
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
    as_text,
    bad_request,
    clean_list,
    clean_optional,
    require_choice,
    require_email,
    require_fields,
    require_min_length,
    sanitize_input,
    updated_text,
)
from models.application import APPLICATION_STATUSES, Application
from applications.schemas import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
)

router = APIRouter(prefix="/api/applications", tags=["applications"])

_COVER_LETTER_MIN = 50


@router.get("", response_model=Envelope[ApplicationListResponse])
def list_applications(
    status_: Optional[str] = Query(None, alias="status"),
    position: Optional[str] = None,
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    q = db.query(Application)
    if status_:
        q = q.filter(Application.status == require_choice(status_, APPLICATION_STATUSES))
    if position:
        q = q.filter(Application.position == position)
    q = search_filter(q, search, Application.applicant_name, Application.email, Application.position)

    applications, pagination = paginate(q, params, Application.created_at.desc(), Application.id.desc())
    return ok(ApplicationListResponse(applications=applications, pagination=pagination))


@router.post("", response_model=Envelope[ApplicationResponse], status_code=status.HTTP_201_CREATED)
def create_application(body: ApplicationCreate, db: Session = Depends(get_db)):
    """Submit a job application (public)."""
    require_fields(
        body.applicant_name,
        body.email,
        body.phone,
        body.position,
        body.experience,
        body.education,
        body.cover_letter,
        body.available_from,
    )
    email = require_email(body.email)
    cover_letter = require_min_length(
        body.cover_letter,
        _COVER_LETTER_MIN,
        f"Cover letter must be at least {_COVER_LETTER_MIN} characters long",
    )

    application = Application(
        applicant_name=sanitize_input(body.applicant_name),
        email=email,
        phone=sanitize_input(body.phone),
        position=sanitize_input(body.position),
        experience=sanitize_input(body.experience),
        education=sanitize_input(body.education),
        current_company=clean_optional(body.current_company),
        expected_salary=clean_optional(as_text(body.expected_salary)),
        available_from=body.available_from,
        cover_letter=cover_letter,
        skills=clean_list(body.skills),
        references=clean_optional(body.references),
        cv_url=clean_optional(body.cv_url),
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    logger.info("Application id=%s received for %s", application.id, application.position)
    return ok(application)


@router.get("/{application_id}", response_model=Envelope[ApplicationResponse])
def get_application(
    application_id: int,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    return ok(get_or_404(db, Application, application_id, "Application"))


@router.patch("/{application_id}", response_model=Envelope[ApplicationResponse])
def update_application(
    application_id: int,
    body: ApplicationUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """Record review progress: status, interview date and interview notes."""
    application = get_or_404(db, Application, application_id, "Application")
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")

    if "status" in fields:
        application.status = require_choice(body.status, APPLICATION_STATUSES)
    if "interview_date" in fields:
        application.interview_date = body.interview_date
    if "interview_notes" in fields:
        application.interview_notes = updated_text(body.interview_notes)

    db.commit()
    db.refresh(application)
    logger.info("user_id=%s updated application id=%s (%s)", current.id, application.id, ", ".join(sorted(fields)))
    return ok(application)


@router.delete("/{application_id}", response_model=Envelope[Message])
def delete_application(
    application_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, Application, application_id, "Application", current.id)
    return ok(Message(message="Application deleted successfully"))
