# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Contact-form and callback request ORM models."""

from sqlalchemy import Column, Integer, String, Text, Enum, DateTime
from sqlalchemy.sql import func

from database import Base

CONTACT_STATUSES = ("NEW", "IN_PROGRESS", "RESOLVED")
CALLBACK_STATUSES = ("PENDING", "COMPLETED", "CANCELLED")


class ContactRequest(Base):
    __tablename__ = "contact_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=True)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)  # staff follow-up
    status = Column(Enum(*CONTACT_STATUSES, name="contact_status"), nullable=False, default="NEW", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class CallbackRequest(Base):
    __tablename__ = "callback_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    email = Column(String(255), nullable=True)
    preferred_time = Column(String(64), nullable=True)  # free text, e.g. "Mornings"
    message = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(Enum(*CALLBACK_STATUSES, name="callback_status"), nullable=False, default="PENDING", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
