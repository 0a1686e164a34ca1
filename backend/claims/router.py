# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Claim endpoints – public lodging from the marketing site, staff review in
the dashboard, and an Excel export of the claims register.
"""

import io
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
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
from models.claim import CLAIM_STATUSES, Claim
from claims.schemas import ClaimCreate, ClaimListResponse, ClaimResponse, ClaimUpdate

router = APIRouter(prefix="/api/claims", tags=["claims"])

_DESCRIPTION_MIN = 20
_DESCRIPTION_SHORT = f"Description must be at least {_DESCRIPTION_MIN} characters long"


def _filtered(db: Session, status_: Optional[str], claim_type: Optional[str], search: Optional[str]):
    q = db.query(Claim)
    if status_:
        q = q.filter(Claim.status == require_choice(status_, CLAIM_STATUSES))
    if claim_type:
        q = q.filter(Claim.type == claim_type)
    return search_filter(q, search, Claim.customer_name, Claim.email, Claim.policy_number)


# ---------------------------------------------------------------------------
# GET /api/claims  – list
# ---------------------------------------------------------------------------


@router.get("", response_model=Envelope[ClaimListResponse])
def list_claims(
    status_: Optional[str] = Query(None, alias="status"),
    claim_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    q = _filtered(db, status_, claim_type, search)
    claims, pagination = paginate(q, params, Claim.created_at.desc(), Claim.id.desc())
    return ok(ClaimListResponse(claims=claims, pagination=pagination))


# ---------------------------------------------------------------------------
# POST /api/claims  – lodge a claim (public)
# ---------------------------------------------------------------------------


@router.post("", response_model=Envelope[ClaimResponse], status_code=status.HTTP_201_CREATED)
def create_claim(body: ClaimCreate, db: Session = Depends(get_db)):
    require_fields(body.customer_name, body.email, body.phone, body.type, body.amount, body.description)
    email = require_email(body.email)
    description = require_min_length(body.description, _DESCRIPTION_MIN, _DESCRIPTION_SHORT)

    claim = Claim(
        customer_name=sanitize_input(body.customer_name),
        email=email,
        phone=sanitize_input(body.phone),
        type=sanitize_input(body.type),
        amount=body.amount,
        policy_number=clean_optional(body.policy_number),
        incident_date=body.incident_date,
        incident_location=clean_optional(body.incident_location),
        description=description,
        documents=clean_list(body.documents),
    )
    db.add(claim)
    db.commit()
    db.refresh(claim)
    logger.info("Claim id=%s lodged (%s)", claim.id, claim.type)
    return ok(claim)


# ---------------------------------------------------------------------------
# GET /api/claims/export  – download the register as Excel
# ---------------------------------------------------------------------------

_HEADER_FONT  = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
_HEADER_FILL  = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
_HEADER_ALIGN = Alignment(horizontal="center", vertical="center")
_THIN_BORDER  = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)

_EXPORT_HEADERS = [
    "ID", "Lodged", "Customer", "Email", "Phone", "Type", "Amount",
    "Policy No.", "Incident Date", "Incident Location", "Status", "Description", "Notes",
]
_COL_MIN = [8, 20, 24, 28, 18, 14, 14, 16, 14, 24, 12, 50, 30]


@router.get("/export")
def export_claims(
    status_: Optional[str] = Query(None, alias="status"),
    claim_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = None,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """
    Stream every claim matching the list filters as an .xlsx workbook,
    newest first.  Nothing is written to disk on the server.
    """
    claims = (
        _filtered(db, status_, claim_type, search)
        .order_by(Claim.created_at.desc(), Claim.id.desc())
        .all()
    )

    wb = Workbook()
    ws = wb.active
    ws.title = "Claims"

    # -- Header row ----------------------------------------------------------
    ws.append(_EXPORT_HEADERS)
    for cell in ws[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _HEADER_ALIGN
        cell.border = _THIN_BORDER

    # -- Data rows -----------------------------------------------------------
    for claim in claims:
        ws.append([
            claim.id,
            claim.created_at.strftime("%Y-%m-%d %H:%M:%S") if claim.created_at else "",
            claim.customer_name,
            claim.email,
            claim.phone,
            claim.type,
            claim.amount,
            claim.policy_number or "",
            claim.incident_date.strftime("%Y-%m-%d") if claim.incident_date else "",
            claim.incident_location or "",
            claim.status,
            claim.description,
            claim.notes or "",
        ])
        row_idx = ws.max_row
        for col_idx in range(1, len(_EXPORT_HEADERS) + 1):
            ws.cell(row=row_idx, column=col_idx).border = _THIN_BORDER

    for col_idx, min_w in enumerate(_COL_MIN, start=1):
        ws.column_dimensions[chr(64 + col_idx)].width = min_w

    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    wb.close()

    logger.info("user_id=%s exported %d claim(s)", current.id, len(claims))
    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": 'attachment; filename="claims.xlsx"'},
    )


# ---------------------------------------------------------------------------
# GET / PUT / DELETE /api/claims/{id}
# ---------------------------------------------------------------------------


@router.get("/{claim_id}", response_model=Envelope[ClaimResponse])
def get_claim(
    claim_id: int,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    return ok(get_or_404(db, Claim, claim_id, "Claim"))


@router.put("/{claim_id}", response_model=Envelope[ClaimResponse])
def update_claim(
    claim_id: int,
    body: ClaimUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """Partial update.  Only fields present in the body are changed."""
    claim = get_or_404(db, Claim, claim_id, "Claim")
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")

    if "customer_name" in fields:
        claim.customer_name = updated_text(body.customer_name, required=True)
    if "email" in fields:
        require_fields(body.email)
        claim.email = require_email(body.email)
    if "phone" in fields:
        claim.phone = updated_text(body.phone, required=True)
    if "type" in fields:
        claim.type = updated_text(body.type, required=True)
    if "amount" in fields:
        require_fields(body.amount)
        claim.amount = body.amount
    if "description" in fields:
        require_fields(body.description)
        claim.description = require_min_length(body.description, _DESCRIPTION_MIN, _DESCRIPTION_SHORT)
    if "status" in fields:
        claim.status = require_choice(body.status, CLAIM_STATUSES)
    if "policy_number" in fields:
        claim.policy_number = updated_text(body.policy_number)
    if "incident_date" in fields:
        claim.incident_date = body.incident_date
    if "incident_location" in fields:
        claim.incident_location = updated_text(body.incident_location)
    if "notes" in fields:
        claim.notes = updated_text(body.notes)
    if "documents" in fields:
        claim.documents = clean_list(body.documents)

    db.commit()
    db.refresh(claim)
    logger.info("user_id=%s updated claim id=%s (%s)", current.id, claim.id, ", ".join(sorted(fields)))
    return ok(claim)


@router.delete("/{claim_id}", response_model=Envelope[Message])
def delete_claim(
    claim_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, Claim, claim_id, "Claim", current.id)
    return ok(Message(message="Claim deleted successfully"))
