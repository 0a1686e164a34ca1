# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Dashboard overview: per-status counts for the main work queues."""

from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from core.responses import Envelope, ok
from core.security import SessionUser, require_auth
from models.application import Application
from models.claim import Claim
from models.quote import Quote
from models.whistleblowing import WhistleblowingReport
from dashboard.schemas import ApplicationStats, ClaimStats, DashboardStats, QuoteStats, ReportStats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _status_counts(db: Session, model) -> Dict[str, int]:
    rows = db.query(model.status, func.count(model.id)).group_by(model.status).all()
    return {row_status: count for row_status, count in rows}


@router.get("/stats", response_model=Envelope[DashboardStats])
def dashboard_stats(
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    claims = _status_counts(db, Claim)
    quotes = _status_counts(db, Quote)
    reports = _status_counts(db, WhistleblowingReport)
    applications = _status_counts(db, Application)

    return ok(DashboardStats(
        claims=ClaimStats(
            total=sum(claims.values()),
            pending=claims.get("PENDING", 0),
            approved=claims.get("APPROVED", 0),
            rejected=claims.get("REJECTED", 0),
        ),
        quotes=QuoteStats(
            total=sum(quotes.values()),
            active=quotes.get("ACTIVE", 0),
            expired=quotes.get("EXPIRED", 0),
            converted=quotes.get("CONVERTED", 0),
        ),
        reports=ReportStats(
            total=sum(reports.values()),
            new=reports.get("NEW", 0),
            pending=reports.get("PENDING", 0),
            resolved=reports.get("RESOLVED", 0),
        ),
        applications=ApplicationStats(
            total=sum(applications.values()),
            new=applications.get("NEW", 0),
            in_review=applications.get("IN_REVIEW", 0),
            approved=applications.get("APPROVED", 0),
            rejected=applications.get("REJECTED", 0),
        ),
    ))
