# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""User and linked OAuth account ORM models."""

from sqlalchemy import Column, Integer, String, Boolean, Enum, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from core.roles import ROLES
from database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # NULL for accounts that only ever signed in through an OAuth provider.
    # passlib embeds the salt in the hash string.
    password_hash = Column(String(255), nullable=True)
    role = Column(Enum(*ROLES, name="user_role"), nullable=False, default="USER")
    is_active = Column(Boolean, nullable=False, default=True)
    phone = Column(String(32), nullable=True)
    image = Column(String(2048), nullable=True)
    email_verified = Column(DateTime(timezone=True), nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class OAuthAccount(Base):
    __tablename__ = "oauth_accounts"
    __table_args__ = (UniqueConstraint("provider", "provider_account_id", name="uq_oauth_provider_account"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider = Column(String(32), nullable=False)             # e.g. "google"
    provider_account_id = Column(String(255), nullable=False)  # provider's subject id
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
