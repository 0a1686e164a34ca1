# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Whistleblowing report ORM model."""

from sqlalchemy import Column, Integer, String, Text, Boolean, Enum, DateTime, JSON
from sqlalchemy.sql import func

from database import Base

REPORT_STATUSES = ("NEW", "PENDING", "UNDER_REVIEW", "RESOLVED")
REPORT_PRIORITIES = ("LOW", "MEDIUM", "HIGH", "CRITICAL")


class WhistleblowingReport(Base):
    __tablename__ = "whistleblowing_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(64), nullable=False)  # e.g. "Fraud", "Misconduct"
    priority = Column(Enum(*REPORT_PRIORITIES, name="report_priority"), nullable=False, default="MEDIUM", index=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    # Reporter contact details are never stored for anonymous reports
    reporter_name = Column(String(255), nullable=True)
    reporter_email = Column(String(255), nullable=True)
    reporter_phone = Column(String(32), nullable=True)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=True)
    witness_details = Column(Text, nullable=True)
    documents = Column(JSON, nullable=False, default=list)
    # Investigation fields, staff only
    assigned_to = Column(String(255), nullable=True)
    action_taken = Column(Text, nullable=True)
    investigation_notes = Column(Text, nullable=True)
    status = Column(Enum(*REPORT_STATUSES, name="report_status"), nullable=False, default="NEW", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
