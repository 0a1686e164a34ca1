# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Single-record lookups shared by the resource routers."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from core.logger import logger


def get_or_404(db: Session, model, record_id: int, entity: str):
    """Return the *model* row with *record_id* or raise 404 "<entity> not found"."""
    row = db.query(model).filter(model.id == record_id).first()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
    return row


def delete_or_404(db: Session, model, record_id: int, entity: str, actor_id: int) -> None:
    """Hard-delete one row.  A missing row is reported as already deleted."""
    row = db.query(model).filter(model.id == record_id).first()
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found or already deleted",
        )
    db.delete(row)
    db.commit()
    logger.info("user_id=%s deleted %s id=%s", actor_id, model.__tablename__, record_id)
