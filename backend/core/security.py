# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  Password hashing, session tokens and the
authorization gate live here.  No other module should touch raw crypto or
decide on its own whether a caller is signed in.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. Session tokens                           (PyJWT / HS256)
3. Session resolution at the request edge   (get_session)
4. Authorization gate                       (authorize, require_auth)

Session model
-------------
The token carries the user id, email, name, role and active flag.  Claims
can go stale (an admin may deactivate or demote the user after sign-in), so
every use of a token re-reads role and active flag from the database
(:func:`refresh_session_claims`).  The gate re-checks once more before any
protected operation.  A deactivated account is therefore stopped at
sign-in, at every token use, and at every gate invocation.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import settings
from core.logger import logger
from core.roles import has_role
from database import get_db

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Hash a plaintext password.  The salt is embedded in the hash string."""
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: Optional[str]) -> bool:
    """
    Constant-time verification against a hash produced by
    :func:`hash_password`.  Accounts without a password never match.
    """
    if not stored_hash:
        return False
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except ValueError:
        # malformed hash in the row
        return False


# ---------------------------------------------------------------------------
# 2.  JWT – session tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionUser:
    """
    The caller as seen by business logic.  Built once per request by
    :func:`get_session` and passed explicitly into handlers.
    """

    id: int
    email: str
    name: Optional[str]
    role: str
    is_active: bool


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a JWT with HS256.  An ``exp`` claim is added automatically.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode["exp"] = expire
    return _jwt.encode(to_encode, settings.secret_key, algorithm="HS256")


def create_session_token(user) -> str:
    """Issue the session token for a User row."""
    return create_access_token(
        {
            "sub": user.email,
            "user_id": user.id,
            "name": user.name,
            "role": user.role,
            "is_active": bool(user.is_active),
        }
    )


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT.  Returns None on any failure."""
    try:
        return _jwt.decode(token, settings.secret_key, algorithms=["HS256"])
    except _jwt.InvalidTokenError:  # includes ExpiredSignatureError
        return None


def session_from_claims(claims: dict) -> Optional[SessionUser]:
    try:
        return SessionUser(
            id=int(claims["user_id"]),
            email=claims.get("sub", ""),
            name=claims.get("name"),
            role=claims["role"],
            is_active=bool(claims.get("is_active", True)),
        )
    except (KeyError, TypeError, ValueError):
        return None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.session_cookie_name, path="/")


# ---------------------------------------------------------------------------
# 3.  Session resolution
# ---------------------------------------------------------------------------

# The tokenUrl here is only used by the auto-generated OpenAPI docs.
# auto_error=False: public endpoints also resolve an optional session.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin", auto_error=False)


def _fetch_user_state(db: Session, user_id: int):
    """Return (role, is_active) for *user_id*, or None if the row is gone."""
    # Lazy import to avoid circular dependency at module load time
    from models.user import User  # noqa: E402

    row = db.query(User.role, User.is_active).filter(User.id == user_id).first()
    if row is None:
        return None
    return row.role, bool(row.is_active)


def refresh_session_claims(session: SessionUser, db: Session) -> SessionUser:
    """
    Re-read role and active flag so that role changes and deactivations take
    effect without a new sign-in.  A vanished user is returned unchanged;
    the gate turns that into 404.  If the database cannot be read the token
    claims are kept.
    """
    try:
        state = _fetch_user_state(db, session.id)
    except SQLAlchemyError as exc:
        logger.warning("Session refresh for user_id=%s skipped: %s", session.id, exc)
        db.rollback()
        return session
    if state is None:
        return session
    role, is_active = state
    return replace(session, role=role, is_active=is_active)


def load_session(token: Optional[str], db: Session) -> Optional[SessionUser]:
    """Decode *token* and refresh its claims.  None when absent or invalid."""
    if not token:
        return None
    claims = decode_access_token(token)
    if claims is None:
        return None
    session = session_from_claims(claims)
    if session is None:
        return None
    return refresh_session_claims(session, db)


def get_session(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[SessionUser]:
    """
    Dependency: the caller's session, or None.  The Authorization header
    wins over the session cookie.
    """
    token = bearer or request.cookies.get(settings.session_cookie_name)
    return load_session(token, db)


# ---------------------------------------------------------------------------
# 4.  Authorization gate
# ---------------------------------------------------------------------------

DEACTIVATED = "Account is deactivated"


def authorize(
    session: Optional[SessionUser],
    db: Session,
    min_role: Optional[str] = None,
) -> SessionUser:
    """
    Confirm the session belongs to an existing, active user holding at
    least *min_role*.  Returns the resolved user; raises HTTPException
    (401 / 403 / 404 / 503) otherwise.
    """
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if not session.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DEACTIVATED)

    try:
        state = _fetch_user_state(db, session.id)
    except SQLAlchemyError as exc:
        db.rollback()
        if not settings.auth_fail_open:
            logger.error("Authorization check for user_id=%s failed: %s", session.id, exc)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database connection error. Please try again later.",
            )
        logger.warning("Authorization check for user_id=%s fell back to session claims: %s", session.id, exc)
        state = (session.role, session.is_active)

    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    role, is_active = state
    if not is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DEACTIVATED)

    if not has_role(role, min_role):
        logger.warning("user_id=%s role=%s denied, %s required", session.id, role, min_role)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return replace(session, role=role, is_active=is_active)


def optional_user(session: Optional[SessionUser], db: Session) -> Optional[SessionUser]:
    """The gate for public endpoints that show more to staff: None instead of raising."""
    try:
        return authorize(session, db)
    except HTTPException:
        return None


def require_auth(min_role: Optional[str] = None):
    """
    Build a dependency that runs the gate.  Use ``Depends(require_auth())``
    for any signed-in user, ``Depends(require_auth(ADMIN))`` for admins.
    """

    def _dependency(
        session: Optional[SessionUser] = Depends(get_session),
        db: Session = Depends(get_db),
    ) -> SessionUser:
        return authorize(session, db, min_role)

    return _dependency


# -- IP Address extraction ----------------------------------------------------


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP address from the request.
    Checks X-Forwarded-For header first (for proxies), then falls back to client host.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first (original client)
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"
