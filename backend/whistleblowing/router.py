# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Whistleblowing endpoints.

Reports are submitted without an account.  An anonymous report keeps no
reporter contact details at all, whatever the form sent.  Investigation
fields are only written through the staff PATCH.
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
    clean_list,
    clean_optional,
    require_choice,
    require_email,
    require_fields,
    require_min_length,
    sanitize_input,
    updated_text,
)
from models.whistleblowing import REPORT_PRIORITIES, REPORT_STATUSES, WhistleblowingReport
from whistleblowing.schemas import ReportCreate, ReportListResponse, ReportResponse, ReportUpdate

router = APIRouter(prefix="/api/whistleblowing", tags=["whistleblowing"])

_DESCRIPTION_MIN = 20


@router.get("", response_model=Envelope[ReportListResponse])
def list_reports(
    status_: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    q = db.query(WhistleblowingReport)
    if status_:
        q = q.filter(WhistleblowingReport.status == require_choice(status_, REPORT_STATUSES))
    if priority:
        q = q.filter(WhistleblowingReport.priority == require_choice(priority, REPORT_PRIORITIES, "priority"))
    q = search_filter(q, search, WhistleblowingReport.type, WhistleblowingReport.description)

    reports, pagination = paginate(
        q, params, WhistleblowingReport.created_at.desc(), WhistleblowingReport.id.desc()
    )
    return ok(ReportListResponse(reports=reports, pagination=pagination))


@router.post("", response_model=Envelope[ReportResponse], status_code=status.HTTP_201_CREATED)
def create_report(body: ReportCreate, db: Session = Depends(get_db)):
    """Submit a report (public)."""
    require_fields(body.type, body.description)
    description = require_min_length(
        body.description,
        _DESCRIPTION_MIN,
        f"Please provide a more detailed description (minimum {_DESCRIPTION_MIN} characters)",
    )
    priority = require_choice(body.priority or "MEDIUM", REPORT_PRIORITIES, "priority")

    if body.is_anonymous:
        reporter_name = reporter_email = reporter_phone = None
    else:
        reporter_name = clean_optional(body.reporter_name)
        # Email is optional for named reports, but must be valid when given
        reporter_email = require_email(body.reporter_email) if clean_optional(body.reporter_email) else None
        reporter_phone = clean_optional(body.reporter_phone)

    report = WhistleblowingReport(
        type=sanitize_input(body.type),
        priority=priority,
        is_anonymous=body.is_anonymous,
        reporter_name=reporter_name,
        reporter_email=reporter_email,
        reporter_phone=reporter_phone,
        description=description,
        location=clean_optional(body.location),
        witness_details=clean_optional(body.witness_details),
        documents=clean_list(body.documents),
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    # No reporter details in the log, even for named reports
    logger.info("Whistleblowing report id=%s received (%s, %s)", report.id, report.type, report.priority)
    return ok(report)


@router.get("/{report_id}", response_model=Envelope[ReportResponse])
def get_report(
    report_id: int,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    return ok(get_or_404(db, WhistleblowingReport, report_id, "Report"))


@router.patch("/{report_id}", response_model=Envelope[ReportResponse])
def update_report(
    report_id: int,
    body: ReportUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """Investigation progress: status, priority, assignee, action taken, notes."""
    report = get_or_404(db, WhistleblowingReport, report_id, "Report")
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")

    if "status" in fields:
        report.status = require_choice(body.status, REPORT_STATUSES)
    if "priority" in fields:
        report.priority = require_choice(body.priority, REPORT_PRIORITIES, "priority")
    if "assigned_to" in fields:
        report.assigned_to = updated_text(body.assigned_to)
    if "action_taken" in fields:
        report.action_taken = updated_text(body.action_taken)
    if "investigation_notes" in fields:
        report.investigation_notes = updated_text(body.investigation_notes)

    db.commit()
    db.refresh(report)
    logger.info("user_id=%s updated report id=%s (%s)", current.id, report.id, ", ".join(sorted(fields)))
    return ok(report)


@router.delete("/{report_id}", response_model=Envelope[Message])
def delete_report(
    report_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, WhistleblowingReport, report_id, "Report", current.id)
    return ok(Message(message="Report deleted successfully"))
