# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Admin endpoints – user lifecycle management.

Every endpoint in this router is guarded by ``require_auth(ADMIN)``.  A
request that carries a valid session but belongs to a USER will receive 403
before any business logic runs.

Containment rules (see ``core.roles``):
* nobody deletes, deactivates or re-roles their own account;
* only SUPER_ADMIN may act on ADMIN / SUPER_ADMIN accounts;
* only SUPER_ADMIN may hand out ADMIN / SUPER_ADMIN.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.logger import logger
from core.pagination import PageParams, page_params, paginate, search_filter
from core.responses import Envelope, Message, ok
from core.roles import ADMIN, ROLES, USER, can_assign_role, can_manage_user
from core.security import SessionUser, hash_password, require_auth
from core.validation import (
    bad_request,
    clean_optional,
    require_choice,
    require_email,
    require_fields,
    sanitize_input,
    validate_new_password,
)
from models.user import User
from admin.schemas import CreateUserRequest, UpdateUserRequest, UserListResponse, UserRow

router = APIRouter(prefix="/api/admin", tags=["admin"])

_ASSIGN_DENIED = "Only super admins can assign admin roles"
_USER_STATUSES = ("active", "inactive")


def _get_user(db: Session, user_id: int) -> User:
    target = db.query(User).filter(User.id == user_id).first()
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return target


def _forbid(reason: Optional[str], admin: SessionUser) -> None:
    if reason:
        logger.warning("user_id=%s refused: %s", admin.id, reason)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=reason)


# ---------------------------------------------------------------------------
# GET /api/admin/users  – list users
# ---------------------------------------------------------------------------


@router.get("/users", response_model=Envelope[UserListResponse])
def list_users(
    search: Optional[str] = Query(None, description="Substring of name or email"),
    role: Optional[str] = Query(None),
    status_: Optional[str] = Query(None, alias="status", description="active | inactive"),
    params: PageParams = Depends(page_params(default_limit=50)),
    admin: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    """Return users newest-first (no password data – handled by the schema)."""
    q = search_filter(db.query(User), search, User.name, User.email)
    if role:
        q = q.filter(User.role == require_choice(role, ROLES, "role"))
    if status_:
        q = q.filter(User.is_active.is_(require_choice(status_, _USER_STATUSES) == "active"))

    users, pagination = paginate(q, params, User.created_at.desc(), User.id.desc())
    return ok(UserListResponse(users=users, pagination=pagination))


# ---------------------------------------------------------------------------
# POST /api/admin/users  – create a user
# ---------------------------------------------------------------------------


@router.post("/users", response_model=Envelope[UserRow], status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    admin: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    require_fields(body.name, body.email, body.password)
    email = require_email(body.email).lower()
    role = require_choice(body.role or USER, ROLES, "role")

    err = validate_new_password(body.password)
    if err:
        raise bad_request(err)

    if not can_assign_role(admin.role, role):
        _forbid(_ASSIGN_DENIED, admin)

    # Uniqueness check
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")

    user = User(
        name=sanitize_input(body.name),
        email=email,
        password_hash=hash_password(body.password),
        phone=clean_optional(body.phone),
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user_id=%s created user_id=%s role=%s", admin.id, user.id, role)
    return ok(user)


# ---------------------------------------------------------------------------
# GET /api/admin/users/{id}
# ---------------------------------------------------------------------------


@router.get("/users/{user_id}", response_model=Envelope[UserRow])
def get_user(
    user_id: int,
    admin: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    return ok(_get_user(db, user_id))


# ---------------------------------------------------------------------------
# PATCH /api/admin/users/{id}  – activate / deactivate, change role
# ---------------------------------------------------------------------------


@router.patch("/users/{user_id}", response_model=Envelope[UserRow])
def update_user(
    user_id: int,
    body: UpdateUserRequest,
    admin: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    """
    Change ``isActive`` and / or ``role``.  A deactivated user is refused at
    the next request by the gate, whatever their token says.
    """
    fields = body.model_fields_set & {"is_active", "role"}
    if not fields:
        raise bad_request("No fields to update")

    target = _get_user(db, user_id)

    if "is_active" in fields and body.is_active is None:
        raise bad_request("Invalid value for isActive")
    if "role" in fields:
        require_choice(body.role, ROLES, "role")

    if "is_active" in fields and body.is_active is False:
        action = "deactivate"
    elif "role" in fields:
        action = "change the role of"
    else:
        action = "modify"
    _forbid(can_manage_user(admin.id, admin.role, target.id, target.role, action), admin)

    if "role" in fields and not can_assign_role(admin.role, body.role):
        _forbid(_ASSIGN_DENIED, admin)

    if "is_active" in fields:
        target.is_active = body.is_active
    if "role" in fields:
        target.role = body.role
    db.commit()
    db.refresh(target)

    logger.info(
        "user_id=%s updated user_id=%s (%s)",
        admin.id,
        target.id,
        ", ".join(f"{f}={getattr(target, f)}" for f in sorted(fields)),
    )
    return ok(target)


# ---------------------------------------------------------------------------
# DELETE /api/admin/users/{id}
# ---------------------------------------------------------------------------


@router.delete("/users/{user_id}", response_model=Envelope[Message])
def delete_user(
    user_id: int,
    admin: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    target = db.query(User).filter(User.id == user_id).first()
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found or already deleted")

    _forbid(can_manage_user(admin.id, admin.role, target.id, target.role, "delete"), admin)

    db.delete(target)
    db.commit()
    logger.info("user_id=%s deleted user_id=%s", admin.id, user_id)
    return ok(Message(message="User deleted successfully"))
