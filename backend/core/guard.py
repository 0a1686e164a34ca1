# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Dashboard navigation guard.

Decides what a navigation to a ``/dashboard`` page should do given the
session state.  This is a convenience for the browser, not a security
boundary: every API endpoint runs the authorization gate itself.

:func:`resolve_navigation` is pure so the browser-side mirror and the
server-side middleware share the same rules.  ``DashboardGuardMiddleware``
applies it to page requests using the session cookie.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

import database
from core.config import settings
from core.logger import logger
from core.security import SessionUser, clear_session_cookie, load_session

DASHBOARD = "/dashboard"
AUTH_PAGES = "/dashboard/auth"
SIGN_IN = "/dashboard/auth/sign-in"

# Session status values, as reported by the client session hook
LOADING = "loading"
AUTHENTICATED = "authenticated"
UNAUTHENTICATED = "unauthenticated"

# Decision actions
RENDER = "render"
SHOW_LOADING = "loading"
REDIRECT = "redirect"
SIGN_OUT = "sign_out"

DEACTIVATED_NOTICE = "Your account has been deactivated. Signing you out..."


@dataclass(frozen=True)
class GuardDecision:
    action: str
    location: Optional[str] = None
    message: Optional[str] = None


def is_auth_page(pathname: str) -> bool:
    return pathname == AUTH_PAGES or pathname.startswith(AUTH_PAGES + "/")


def resolve_navigation(status: str, pathname: str, session: Optional[SessionUser]) -> GuardDecision:
    if is_auth_page(pathname):
        if status == AUTHENTICATED:
            return GuardDecision(REDIRECT, DASHBOARD)
        return GuardDecision(RENDER)

    if status == LOADING:
        return GuardDecision(SHOW_LOADING)

    if status != AUTHENTICATED or session is None:
        return GuardDecision(
            REDIRECT,
            f"{SIGN_IN}?from={quote(pathname, safe='')}",
            "Redirecting to sign in...",
        )

    if not session.is_active:
        return GuardDecision(SIGN_OUT, f"{SIGN_IN}?error=AccountDisabled", DEACTIVATED_NOTICE)

    return GuardDecision(RENDER)


def _load_cookie_session(token: str) -> Optional[SessionUser]:
    db = database.SessionLocal()
    try:
        return load_session(token, db)
    finally:
        db.close()


class DashboardGuardMiddleware(BaseHTTPMiddleware):
    """Apply :func:`resolve_navigation` to GET requests for dashboard pages."""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if request.method != "GET" or not (path == DASHBOARD or path.startswith(DASHBOARD + "/")):
            return await call_next(request)

        token = request.cookies.get(settings.session_cookie_name)
        session = await run_in_threadpool(_load_cookie_session, token) if token else None

        status = AUTHENTICATED if session is not None else UNAUTHENTICATED
        decision = resolve_navigation(status, path, session)

        if decision.action == RENDER:
            return await call_next(request)

        response = RedirectResponse(decision.location, status_code=303)
        if decision.action == SIGN_OUT:
            logger.info("Signing out deactivated user_id=%s on %s", session.id, path)
            clear_session_cookie(response)
        return response
