# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
File upload endpoint, used by the public forms (CVs, whistleblowing
evidence) and by the dashboard (documents, news images).

A *public* upload is one flagged ``public=true`` or aimed at a folder used
by a public form.  Public uploads need no session but are restricted to
document and image types.  Every other upload requires a signed-in user.
Both are capped at ``settings.max_upload_bytes``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db
from core.config import settings
from core.logger import logger
from core.responses import Envelope, ok
from core.security import SessionUser, authorize, get_session
from core.storage import MediaStorage, StorageError, get_storage
from core.validation import bad_request
from uploads.schemas import UploadResponse

router = APIRouter(prefix="/api/upload", tags=["uploads"])

ALLOWED_PUBLIC_TYPES = (
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)
_PUBLIC_FOLDERS = ("whistleblowing", "applications")


def is_public_upload(public_flag: Optional[str], folder: str) -> bool:
    return public_flag == "true" or any(name in folder for name in _PUBLIC_FOLDERS)


@router.post("", response_model=Envelope[UploadResponse])
async def upload_file(
    file: Optional[UploadFile] = File(None),
    folder: Optional[str] = Form(None),
    public: Optional[str] = Form(None),
    session: Optional[SessionUser] = Depends(get_session),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    if file is None or not file.filename:
        raise bad_request("No file provided")

    folder = folder or settings.default_upload_folder
    limit_mb = settings.max_upload_bytes // (1024 * 1024)
    content_type = file.content_type or "application/octet-stream"

    if is_public_upload(public, folder):
        if content_type not in ALLOWED_PUBLIC_TYPES:
            raise bad_request("Invalid file type. Allowed: PDF, JPG, PNG, DOC, DOCX")
        too_large = f"File size exceeds {limit_mb}MB limit for public uploads"
        uploader = None
    else:
        uploader = await run_in_threadpool(authorize, session, db)
        too_large = f"File size exceeds {limit_mb}MB limit"

    # Read one byte past the cap so oversize files are refused without
    # buffering them whole
    data = await file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise bad_request(too_large)

    try:
        result = await run_in_threadpool(storage.upload, data, folder, file.filename, content_type)
    except StorageError as exc:
        logger.error("Upload of %s to %s failed: %s", file.filename, folder, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload file to storage service",
        )

    logger.info(
        "Stored %s (%d bytes) as %s for %s",
        file.filename,
        len(data),
        result.public_id,
        f"user_id={uploader.id}" if uploader else "public form",
    )
    return ok(UploadResponse(
        url=result.url,
        public_id=result.public_id,
        filename=file.filename,
        size=len(data),
        type=content_type,
    ))
