# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Job application ORM model."""

from sqlalchemy import Column, Integer, String, Text, Enum, DateTime, JSON
from sqlalchemy.sql import func

from database import Base

APPLICATION_STATUSES = ("NEW", "IN_REVIEW", "INTERVIEW_SCHEDULED", "APPROVED", "REJECTED")


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    applicant_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=False)
    position = Column(String(255), nullable=False)
    experience = Column(Text, nullable=False)
    education = Column(Text, nullable=False)
    current_company = Column(String(255), nullable=True)
    expected_salary = Column(String(64), nullable=True)
    available_from = Column(DateTime(timezone=True), nullable=False)
    cover_letter = Column(Text, nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    references = Column(Text, nullable=True)
    cv_url = Column(String(2048), nullable=True)
    # Filled in by staff during review
    interview_date = Column(DateTime(timezone=True), nullable=True)
    interview_notes = Column(Text, nullable=True)
    status = Column(Enum(*APPLICATION_STATUSES, name="application_status"), nullable=False, default="NEW", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
