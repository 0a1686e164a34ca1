# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Quote ORM model."""

from sqlalchemy import Column, Integer, String, Text, Float, Enum, DateTime
from sqlalchemy.sql import func

from database import Base

# First value is the default for new quotes
QUOTE_STATUSES = ("ACTIVE", "PENDING", "EXPIRED", "CONVERTED")


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=False)
    product_type = Column(String(64), nullable=False)  # e.g. "life", "motor"
    amount = Column(Float, nullable=False)
    # Motor quotes only
    vehicle_make = Column(String(64), nullable=True)
    vehicle_model = Column(String(64), nullable=True)
    vehicle_year = Column(String(8), nullable=True)
    vehicle_reg_no = Column(String(32), nullable=True)
    notes = Column(Text, nullable=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(Enum(*QUOTE_STATUSES, name="quote_status"), nullable=False, default=QUOTE_STATUSES[0], index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
