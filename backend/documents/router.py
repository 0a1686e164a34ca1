# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Downloadable document endpoints (policy wordings, forms, reports).

Listing and reading are public; anonymous callers only ever see PUBLISHED
documents, staff see everything and may filter by status.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.logger import logger
from core.pagination import PageParams, page_params, paginate, search_filter
from core.records import delete_or_404, get_or_404
from core.responses import Envelope, Message, ok
from core.roles import ADMIN
from core.security import SessionUser, get_session, optional_user, require_auth
from core.validation import (
    as_text,
    bad_request,
    require_choice,
    require_fields,
    require_min_length,
    sanitize_input,
    updated_text,
)
from models.document import DOCUMENT_STATUSES, Document
from documents.schemas import DocumentCreate, DocumentListResponse, DocumentResponse, DocumentUpdate

router = APIRouter(prefix="/api/documents", tags=["documents"])

_PUBLISHED = "PUBLISHED"
_TITLE_MIN = 3
_DESCRIPTION_MIN = 10
_TITLE_SHORT = f"Title must be at least {_TITLE_MIN} characters long"
_DESCRIPTION_SHORT = f"Description must be at least {_DESCRIPTION_MIN} characters long"


def _visible(db: Session, document_id: int, viewer: Optional[SessionUser]) -> Document:
    document = get_or_404(db, Document, document_id, "Document")
    if viewer is None and document.status != _PUBLISHED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return document


@router.get("", response_model=Envelope[DocumentListResponse])
def list_documents(
    category: Optional[str] = None,
    status_: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    session: Optional[SessionUser] = Depends(get_session),
    db: Session = Depends(get_db),
):
    viewer = optional_user(session, db)

    q = db.query(Document)
    if viewer is None:
        q = q.filter(Document.status == _PUBLISHED)
    elif status_:
        q = q.filter(Document.status == require_choice(status_, DOCUMENT_STATUSES))
    if category:
        q = q.filter(Document.category == category)
    q = search_filter(q, search, Document.title, Document.description)

    documents, pagination = paginate(q, params, Document.created_at.desc(), Document.id.desc())
    return ok(DocumentListResponse(documents=documents, pagination=pagination))


@router.post("", response_model=Envelope[DocumentResponse], status_code=status.HTTP_201_CREATED)
def create_document(
    body: DocumentCreate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    require_fields(body.title, body.description, body.category, body.file_url, body.file_size, body.file_type)
    title = require_min_length(body.title, _TITLE_MIN, _TITLE_SHORT)
    description = require_min_length(body.description, _DESCRIPTION_MIN, _DESCRIPTION_SHORT)

    document = Document(
        title=title,
        description=description,
        category=sanitize_input(body.category),
        file_url=sanitize_input(body.file_url),
        file_size=sanitize_input(as_text(body.file_size)),
        file_type=sanitize_input(body.file_type),
        uploaded_by=current.name or "Admin",
        uploader_id=current.id,
        status=require_choice(body.status or _PUBLISHED, DOCUMENT_STATUSES),
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    logger.info("user_id=%s published document id=%s (%s)", current.id, document.id, document.status)
    return ok(document)


@router.get("/{document_id}", response_model=Envelope[DocumentResponse])
def get_document(
    document_id: int,
    session: Optional[SessionUser] = Depends(get_session),
    db: Session = Depends(get_db),
):
    return ok(_visible(db, document_id, optional_user(session, db)))


@router.put("/{document_id}", response_model=Envelope[DocumentResponse])
def update_document(
    document_id: int,
    body: DocumentUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """Partial update of the listing; the file itself is replaced by a new upload."""
    document = get_or_404(db, Document, document_id, "Document")
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")

    if "title" in fields:
        require_fields(body.title)
        document.title = require_min_length(body.title, _TITLE_MIN, _TITLE_SHORT)
    if "description" in fields:
        require_fields(body.description)
        document.description = require_min_length(body.description, _DESCRIPTION_MIN, _DESCRIPTION_SHORT)
    if "category" in fields:
        document.category = updated_text(body.category, required=True)
    if "status" in fields:
        document.status = require_choice(body.status, DOCUMENT_STATUSES)

    db.commit()
    db.refresh(document)
    logger.info("user_id=%s updated document id=%s (%s)", current.id, document.id, ", ".join(sorted(fields)))
    return ok(document)


@router.patch("/{document_id}", response_model=Envelope[DocumentResponse])
def record_download(
    document_id: int,
    session: Optional[SessionUser] = Depends(get_session),
    db: Session = Depends(get_db),
):
    """Count one download (public).  The increment happens in SQL."""
    document = _visible(db, document_id, optional_user(session, db))
    db.query(Document).filter(Document.id == document.id).update(
        {Document.downloads: Document.downloads + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(document)
    return ok(document)


@router.delete("/{document_id}", response_model=Envelope[Message])
def delete_document(
    document_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, Document, document_id, "Document", current.id)
    return ok(Message(message="Document deleted successfully"))
