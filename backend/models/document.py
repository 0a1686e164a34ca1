# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Downloadable document ORM model (policy wordings, forms, reports …)."""

from sqlalchemy import Column, Integer, String, Text, Enum, DateTime, ForeignKey
from sqlalchemy.sql import func

from database import Base

DOCUMENT_STATUSES = ("PUBLISHED", "DRAFT")


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(64), nullable=False, index=True)
    file_url = Column(String(2048), nullable=False)
    file_size = Column(String(32), nullable=False)   # display string, e.g. "1.2 MB"
    file_type = Column(String(64), nullable=False)
    downloads = Column(Integer, nullable=False, default=0)
    uploaded_by = Column(String(255), nullable=False)
    uploader_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status = Column(Enum(*DOCUMENT_STATUSES, name="document_status"), nullable=False, default="PUBLISHED", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
