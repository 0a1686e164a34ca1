# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – credentials and Google sign-in, sign-out, registration,
session lookup – plus the signed-in user's own profile.

Security notes
--------------
* Sign-in returns the *same* error message whether the email doesn't exist,
  the account has no password (OAuth only) or the password is wrong.  This
  prevents user-enumeration attacks.
* A deactivated account is reported distinctly as soon as it is found, even
  before the password is checked.  This reveals that the email exists.
* change-password verifies the current password before accepting the new
  one, so a stolen (but not yet expired) token alone cannot reset it.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db
from core.logger import logger
from core.responses import Envelope, Message, ok
from core.roles import USER
from core.security import (
    DEACTIVATED,
    SessionUser,
    clear_session_cookie,
    create_session_token,
    get_session,
    hash_password,
    require_auth,
    set_session_cookie,
    verify_password,
)
from core.validation import (
    bad_request,
    clean_optional,
    require_email,
    require_fields,
    sanitize_input,
    validate_new_password,
)
from models.user import User
from auth import oauth
from auth.schemas import (
    ChangePasswordRequest,
    HasPasswordResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    SessionInfo,
    SignInErrorInfo,
    SignInRequest,
    SignInResponse,
    UserInfoResponse,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])
profile_router = APIRouter(prefix="/api/user", tags=["profile"])

# Generic message used for both "no such email" and "wrong password"
_LOGIN_FAIL = "Invalid email or password"

SIGN_IN_PAGE = "/dashboard/auth/sign-in"

# Session error codes surfaced to the sign-in page as ?error=CODE
SIGN_IN_ERRORS = {
    "AccessDenied": "Your account has been deactivated.",
    "AccountDisabled": "Your account has been deactivated.",
    "OAuthAccountNotLinked": "This email is already registered with a different sign-in method.",
    "Configuration": "Authentication configuration error. Please try again later.",
    "CredentialsSignin": "Invalid email or password.",
}
_SIGN_IN_ERROR_DEFAULT = "Sign-in failed. Please try again."


def sign_in_error_message(code: Optional[str]) -> str:
    return SIGN_IN_ERRORS.get(code or "", _SIGN_IN_ERROR_DEFAULT)


def _session_info(user: User) -> SessionInfo:
    return SessionInfo(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        is_active=user.is_active,
    )


def _sign_in_redirect(error: str) -> RedirectResponse:
    return RedirectResponse(f"{SIGN_IN_PAGE}?error={error}", status_code=303)


# ---------------------------------------------------------------------------
# POST /api/auth/signin  – credentials
# ---------------------------------------------------------------------------


@router.post("/signin", response_model=Envelope[SignInResponse])
def sign_in(body: SignInRequest, response: Response, db: Session = Depends(get_db)):
    """Authenticate with email + password; returns a token and sets the session cookie."""
    email = sanitize_input(body.email or "").lower()
    if not email or not body.password:
        raise bad_request("Email and password are required")

    user = db.query(User).filter(User.email == email).first()

    # Unified failure path – no information leaks about whether the email exists
    if not user or not user.password_hash:
        logger.warning("Failed sign-in for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    if not user.is_active or not oauth.allow_sign_in(db, user.id):
        logger.warning("Sign-in refused for deactivated user_id=%s", user.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DEACTIVATED)

    if not verify_password(body.password, user.password_hash):
        logger.warning("Failed sign-in for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    token = create_session_token(user)
    set_session_cookie(response, token)
    logger.info("user_id=%s signed in with credentials", user.id)
    return ok(SignInResponse(access_token=token, token_type="bearer", user=_session_info(user)))


# ---------------------------------------------------------------------------
# Google OAuth
# ---------------------------------------------------------------------------


@router.get("/signin/google")
async def google_sign_in(request: Request, return_to: Optional[str] = Query(None, alias="from")):
    """Redirect to Google's consent screen."""
    try:
        return await oauth.authorize_redirect(request, return_to)
    except oauth.OAuthError as exc:
        logger.error("Google sign-in unavailable: %s", exc)
        return _sign_in_redirect(exc.code)


def _complete_google_sign_in(db: Session, profile: dict) -> User:
    user = oauth.resolve_oauth_user(db, oauth.GOOGLE, profile)
    if not oauth.allow_sign_in(db, user.id):
        raise oauth.OAuthError("AccessDenied", f"user_id={user.id} is deactivated")

    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


@router.get("/callback/google")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    error: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Finish the Google flow: resolve the account, check it is active, set the session."""
    return_to = oauth.pop_return_path(request)
    if error or not code:
        # user pressed "cancel" on the consent screen
        return _sign_in_redirect("AccessDenied")

    try:
        profile = await oauth.fetch_google_profile(request)
        user = await run_in_threadpool(_complete_google_sign_in, db, profile)
    except oauth.OAuthError as exc:
        logger.warning("Google sign-in failed (%s): %s", exc.code, exc)
        return _sign_in_redirect(exc.code)

    response = RedirectResponse(return_to, status_code=303)
    set_session_cookie(response, create_session_token(user))
    logger.info("user_id=%s signed in with google", user.id)
    return response


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@router.post("/signout", response_model=Envelope[Message])
def sign_out(response: Response):
    clear_session_cookie(response)
    return ok(Message(message="Signed out"))


@router.get("/session", response_model=Envelope[Optional[SessionInfo]])
def current_session(session: Optional[SessionUser] = Depends(get_session)):
    """
    The refreshed session, or null.  Deactivated sessions are returned as
    such so the browser can sign the user out.
    """
    if session is None:
        return ok(None)
    return ok(SessionInfo(
        id=session.id,
        email=session.email,
        name=session.name,
        role=session.role,
        is_active=session.is_active,
    ))


@router.get("/error", response_model=Envelope[SignInErrorInfo])
def sign_in_error(error: Optional[str] = None):
    """Map a ``?error=`` code from the sign-in redirect to a user-facing message."""
    return ok(SignInErrorInfo(code=error or "", message=sign_in_error_message(error)))


@router.get("/me", response_model=Envelope[UserInfoResponse])
def me(current: SessionUser = Depends(require_auth()), db: Session = Depends(get_db)):
    """Return the authenticated user's public profile (no secrets)."""
    user = db.query(User).filter(User.id == current.id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ok(user)


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=Envelope[UserInfoResponse], status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Self-service sign-up.  New accounts always get the USER role."""
    require_fields(body.name, body.email, body.password)
    email = require_email(body.email).lower()

    err = validate_new_password(body.password)
    if err:
        raise bad_request(err)

    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")

    user = User(
        name=sanitize_input(body.name),
        email=email,
        password_hash=hash_password(body.password),
        phone=clean_optional(body.phone),
        role=USER,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user_id=%s", user.id)
    return ok(user)


# ---------------------------------------------------------------------------
# /api/user – own profile
# ---------------------------------------------------------------------------


def _own_user(current: SessionUser, db: Session) -> User:
    user = db.query(User).filter(User.id == current.id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@profile_router.put("/profile", response_model=Envelope[UserInfoResponse])
def update_profile(
    body: ProfileUpdateRequest,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """Update name, email and phone.  Only fields present in the body change."""
    user = _own_user(current, db)
    fields = body.model_fields_set

    if body.name:
        user.name = sanitize_input(body.name)
    if body.email:
        email = require_email(body.email).lower()
        if email != user.email:
            if db.query(User).filter(User.email == email, User.id != user.id).first():
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")
            user.email = email
    if "phone" in fields:
        user.phone = clean_optional(body.phone)

    db.commit()
    db.refresh(user)
    return ok(user)


@profile_router.get("/has-password", response_model=Envelope[HasPasswordResponse])
def has_password(current: SessionUser = Depends(require_auth()), db: Session = Depends(get_db)):
    """OAuth-only accounts have no password until they set one."""
    user = _own_user(current, db)
    return ok(HasPasswordResponse(has_password=bool(user.password_hash)))


@profile_router.post("/change-password", response_model=Envelope[Message])
def change_password(
    body: ChangePasswordRequest,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """
    Change (or, for OAuth-only accounts, set) the login password.  The
    current password is required whenever one exists.
    """
    user = _own_user(current, db)
    require_fields(body.new_password)

    if user.password_hash and not verify_password(body.current_password or "", user.password_hash):
        raise bad_request("Current password is incorrect")

    err = validate_new_password(body.new_password)
    if err:
        raise bad_request(err)

    user.password_hash = hash_password(body.new_password)
    db.commit()
    logger.info("user_id=%s changed password", user.id)
    return ok(Message(message="Password changed successfully"))
