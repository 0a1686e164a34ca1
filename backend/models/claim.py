# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Claim ORM model – an insurance claim lodged from the public site."""

from sqlalchemy import Column, Integer, String, Text, Float, Enum, DateTime, JSON
from sqlalchemy.sql import func

from database import Base

CLAIM_STATUSES = ("PENDING", "APPROVED", "REJECTED")


class Claim(Base):
    __tablename__ = "claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=False)
    type = Column(String(64), nullable=False)          # e.g. "Motor", "Health"
    amount = Column(Float, nullable=False)
    policy_number = Column(String(64), nullable=True)
    incident_date = Column(DateTime(timezone=True), nullable=True)
    incident_location = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    documents = Column(JSON, nullable=False, default=list)  # uploaded file URLs
    status = Column(Enum(*CLAIM_STATUSES, name="claim_status"), nullable=False, default="PENDING", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
