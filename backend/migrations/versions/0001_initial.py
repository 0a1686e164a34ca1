"""Initial schema – users, OAuth links and the site's submission tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

Creates every table with its enumerations, foreign-key constraints and the
indexes used by the list endpoints (status filters, newest-first ordering).
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True) -> list:
    cols = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        )
    ]
    if updated:
        cols.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
                nullable=False,
            )
        )
    return cols


def _status(values: tuple, name: str, default: str) -> sa.Column:
    return sa.Column("status", sa.Enum(*values, name=name), nullable=False, server_default=default)


def upgrade() -> None:
    # -- users ----------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        # NULL for OAuth-only accounts
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column(
            "role",
            sa.Enum("USER", "ADMIN", "SUPER_ADMIN", name="user_role"),
            nullable=False,
            server_default="USER",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("image", sa.String(2048), nullable=True),
        sa.Column("email_verified", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # -- oauth_accounts -------------------------------------------------
    op.create_table(
        "oauth_accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(32), nullable=False),
        sa.Column("provider_account_id", sa.String(255), nullable=False),
        *_timestamps(updated=False),
        sa.UniqueConstraint("provider", "provider_account_id", name="uq_oauth_provider_account"),
    )
    op.create_index("ix_oauth_accounts_user_id", "oauth_accounts", ["user_id"])

    # -- claims ---------------------------------------------------------
    op.create_table(
        "claims",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("policy_number", sa.String(64), nullable=True),
        sa.Column("incident_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("incident_location", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("documents", sa.JSON(), nullable=False),
        _status(("PENDING", "APPROVED", "REJECTED"), "claim_status", "PENDING"),
        *_timestamps(),
    )
    op.create_index("ix_claims_email", "claims", ["email"])
    op.create_index("ix_claims_status", "claims", ["status"])
    op.create_index("ix_claims_created_at", "claims", ["created_at"])

    # -- quotes ---------------------------------------------------------
    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("product_type", sa.String(64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("vehicle_make", sa.String(64), nullable=True),
        sa.Column("vehicle_model", sa.String(64), nullable=True),
        sa.Column("vehicle_year", sa.String(8), nullable=True),
        sa.Column("vehicle_reg_no", sa.String(32), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=False),
        _status(("ACTIVE", "PENDING", "EXPIRED", "CONVERTED"), "quote_status", "ACTIVE"),
        *_timestamps(),
    )
    op.create_index("ix_quotes_email", "quotes", ["email"])
    op.create_index("ix_quotes_status", "quotes", ["status"])
    op.create_index("ix_quotes_created_at", "quotes", ["created_at"])

    # -- applications ---------------------------------------------------
    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("applicant_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("experience", sa.Text(), nullable=False),
        sa.Column("education", sa.Text(), nullable=False),
        sa.Column("current_company", sa.String(255), nullable=True),
        sa.Column("expected_salary", sa.String(64), nullable=True),
        sa.Column("available_from", sa.DateTime(timezone=True), nullable=False),
        sa.Column("cover_letter", sa.Text(), nullable=False),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("references", sa.Text(), nullable=True),
        sa.Column("cv_url", sa.String(2048), nullable=True),
        sa.Column("interview_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("interview_notes", sa.Text(), nullable=True),
        _status(
            ("NEW", "IN_REVIEW", "INTERVIEW_SCHEDULED", "APPROVED", "REJECTED"),
            "application_status",
            "NEW",
        ),
        *_timestamps(),
    )
    op.create_index("ix_applications_email", "applications", ["email"])
    op.create_index("ix_applications_status", "applications", ["status"])
    op.create_index("ix_applications_created_at", "applications", ["created_at"])

    # -- whistleblowing_reports -----------------------------------------
    op.create_table(
        "whistleblowing_reports",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column(
            "priority",
            sa.Enum("LOW", "MEDIUM", "HIGH", "CRITICAL", name="report_priority"),
            nullable=False,
            server_default="MEDIUM",
        ),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reporter_name", sa.String(255), nullable=True),
        sa.Column("reporter_email", sa.String(255), nullable=True),
        sa.Column("reporter_phone", sa.String(32), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("witness_details", sa.Text(), nullable=True),
        sa.Column("documents", sa.JSON(), nullable=False),
        sa.Column("assigned_to", sa.String(255), nullable=True),
        sa.Column("action_taken", sa.Text(), nullable=True),
        sa.Column("investigation_notes", sa.Text(), nullable=True),
        _status(("NEW", "PENDING", "UNDER_REVIEW", "RESOLVED"), "report_status", "NEW"),
        *_timestamps(),
    )
    op.create_index("ix_whistleblowing_reports_priority", "whistleblowing_reports", ["priority"])
    op.create_index("ix_whistleblowing_reports_status", "whistleblowing_reports", ["status"])
    op.create_index("ix_whistleblowing_reports_created_at", "whistleblowing_reports", ["created_at"])

    # -- documents ------------------------------------------------------
    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("file_url", sa.String(2048), nullable=False),
        sa.Column("file_size", sa.String(32), nullable=False),
        sa.Column("file_type", sa.String(64), nullable=False),
        sa.Column("downloads", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("uploaded_by", sa.String(255), nullable=False),
        sa.Column(
            "uploader_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _status(("PUBLISHED", "DRAFT"), "document_status", "PUBLISHED"),
        *_timestamps(),
    )
    op.create_index("ix_documents_category", "documents", ["category"])
    op.create_index("ix_documents_uploader_id", "documents", ["uploader_id"])
    op.create_index("ix_documents_status", "documents", ["status"])
    op.create_index("ix_documents_created_at", "documents", ["created_at"])

    # -- news -----------------------------------------------------------
    op.create_table(
        "news",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column(
            "author_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _status(("DRAFT", "PUBLISHED"), "news_status", "DRAFT"),
        sa.Column(
            "published_date",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_news_category", "news", ["category"])
    op.create_index("ix_news_author_id", "news", ["author_id"])
    op.create_index("ix_news_status", "news", ["status"])
    op.create_index("ix_news_published_date", "news", ["published_date"])

    # -- contact_requests -----------------------------------------------
    op.create_table(
        "contact_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _status(("NEW", "IN_PROGRESS", "RESOLVED"), "contact_status", "NEW"),
        *_timestamps(),
    )
    op.create_index("ix_contact_requests_email", "contact_requests", ["email"])
    op.create_index("ix_contact_requests_status", "contact_requests", ["status"])
    op.create_index("ix_contact_requests_created_at", "contact_requests", ["created_at"])

    # -- callback_requests ----------------------------------------------
    op.create_table(
        "callback_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("preferred_time", sa.String(64), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _status(("PENDING", "COMPLETED", "CANCELLED"), "callback_status", "PENDING"),
        *_timestamps(),
    )
    op.create_index("ix_callback_requests_status", "callback_requests", ["status"])
    op.create_index("ix_callback_requests_created_at", "callback_requests", ["created_at"])


_TABLES = (
    "callback_requests",
    "contact_requests",
    "news",
    "documents",
    "whistleblowing_reports",
    "applications",
    "quotes",
    "claims",
    "oauth_accounts",
    "users",
)

_ENUMS = (
    "callback_status",
    "contact_status",
    "news_status",
    "document_status",
    "report_status",
    "report_priority",
    "application_status",
    "quote_status",
    "claim_status",
    "user_role",
)


def downgrade() -> None:
    # Indexes go with their tables
    for table in _TABLES:
        op.drop_table(table)
    # PostgreSQL keeps enum types after the tables are gone
    bind = op.get_bind()
    for name in _ENUMS:
        sa.Enum(name=name).drop(bind, checkfirst=True)
