# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Google OAuth (authorization-code flow) and the sign-in callback shared with
the credentials path.

Flow
----
1. ``/api/auth/signin/google`` stores the page to return to in the signed
   Starlette session and redirects to Google through authlib, which also
   keeps the ``state`` and ``nonce`` there.
2. Google redirects to ``/api/auth/callback/google?code=…&state=…``.
3. :func:`fetch_google_profile` lets authlib check the state, exchange the
   code and read the OpenID userinfo.
4. :func:`resolve_oauth_user` finds the linked account or creates one.
5. :func:`allow_sign_in` re-checks that the account is active.

Failures are raised as :class:`OAuthError` whose ``code`` is one of the
session error codes understood by the sign-in page.
"""

from datetime import datetime, timezone
from typing import Optional

import httpx
from authlib.integrations.starlette_client import OAuth
from authlib.integrations.starlette_client import OAuthError as ProviderError
from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import Response

from core.config import settings
from core.logger import logger
from core.roles import USER
from core.validation import sanitize_input
from models.user import OAuthAccount, User

GOOGLE = "google"

_GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"
_RETURN_KEY = "oauth_from"

oauth_registry = OAuth()
oauth_registry.register(
    name=GOOGLE,
    client_id=settings.google_client_id,
    client_secret=settings.google_client_secret,
    server_metadata_url=_GOOGLE_METADATA_URL,
    client_kwargs={"scope": "openid email profile", "timeout": 10.0},
)


class OAuthError(Exception):
    def __init__(self, code: str, detail: str = ""):
        super().__init__(detail or code)
        self.code = code


def is_configured() -> bool:
    return bool(settings.google_client_id and settings.google_client_secret)


def redirect_uri() -> str:
    return f"{settings.public_base_url.rstrip('/')}/api/auth/callback/{GOOGLE}"


def safe_return_path(value: Optional[str], default: str = "/dashboard") -> str:
    """Only same-site absolute paths may be used as a post-sign-in target."""
    if not value or not value.startswith("/") or value.startswith("//"):
        return default
    return value


# ---------------------------------------------------------------------------
# Provider calls
# ---------------------------------------------------------------------------


async def authorize_redirect(request: Request, return_to: Optional[str]) -> Response:
    """Remember where to land afterwards and send the browser to Google."""
    if not is_configured():
        raise OAuthError("Configuration", "Google OAuth client is not configured")
    request.session[_RETURN_KEY] = safe_return_path(return_to)
    try:
        return await oauth_registry.google.authorize_redirect(
            request, redirect_uri(), prompt="select_account"
        )
    except (ProviderError, httpx.HTTPError) as exc:
        raise OAuthError("Configuration", f"Google discovery failed: {exc}") from exc


def pop_return_path(request: Request) -> str:
    return safe_return_path(request.session.pop(_RETURN_KEY, None))


async def fetch_google_profile(request: Request) -> dict:
    """Check the callback state, exchange the code and return the OpenID userinfo."""
    if not is_configured():
        raise OAuthError("Configuration", "Google OAuth client is not configured")
    client = oauth_registry.google
    try:
        token = await client.authorize_access_token(request)
        profile = token.get("userinfo") or await client.userinfo(token=token)
    except ProviderError as exc:
        if exc.error == "mismatching_state":
            raise OAuthError("OAuthCallback", "Invalid or expired OAuth state") from exc
        raise OAuthError("Configuration", f"Google token exchange failed: {exc}") from exc
    except httpx.HTTPError as exc:
        raise OAuthError("Configuration", f"Google token exchange failed: {exc}") from exc

    profile = dict(profile or {})
    if not profile.get("sub") or not profile.get("email"):
        raise OAuthError("Configuration", "Google profile is missing sub or email")
    if profile.get("email_verified") is False:
        raise OAuthError("AccessDenied", "Google email address is not verified")
    return profile


# ---------------------------------------------------------------------------
# Account resolution
# ---------------------------------------------------------------------------


def resolve_oauth_user(db: Session, provider: str, profile: dict) -> User:
    """
    Return the user linked to this provider identity, creating user and link
    on first sign-in.  An existing account with the same email but no link
    is refused with ``OAuthAccountNotLinked`` rather than silently merged.
    """
    account_id = str(profile["sub"])
    email = sanitize_input(profile["email"]).lower()

    account = (
        db.query(OAuthAccount)
        .filter(OAuthAccount.provider == provider, OAuthAccount.provider_account_id == account_id)
        .first()
    )
    if account:
        user = db.query(User).filter(User.id == account.user_id).first()
        if user:
            return user
        # dangling link (user deleted without cascade)
        db.delete(account)
        db.flush()

    if db.query(User).filter(User.email == email).first():
        raise OAuthError("OAuthAccountNotLinked", f"{email} exists without a {provider} link")

    user = User(
        name=sanitize_input(profile.get("name") or "") or None,
        email=email,
        password_hash=None,
        image=profile.get("picture"),
        role=USER,
        is_active=True,
        email_verified=datetime.now(timezone.utc),
    )
    db.add(user)
    db.flush()  # get user.id before commit
    db.add(OAuthAccount(user_id=user.id, provider=provider, provider_account_id=account_id))
    db.commit()
    db.refresh(user)
    logger.info("Created user_id=%s from %s sign-in", user.id, provider)
    return user


def allow_sign_in(db: Session, user_id: int) -> bool:
    """
    Sign-in callback for every provider: only existing, active accounts may
    receive a session.  Unlike the gate this fails closed.
    """
    try:
        row = db.query(User.is_active).filter(User.id == user_id).first()
    except SQLAlchemyError as exc:
        logger.error("Sign-in check for user_id=%s failed: %s", user_id, exc)
        db.rollback()
        return False
    return bool(row and row.is_active)
