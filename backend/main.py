# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Instantiate the FastAPI app and its envelope / error handlers.
* Register CORS, request logging, the dashboard guard, locale routing and
  the signed session authlib keeps the OAuth state in.
* Mount the resource routers under ``/api``.
* Serve locally stored media and, when present, the built frontend so a
  single ``uvicorn`` process serves both the API and the site.
* Expose a /health endpoint for container liveness checks.
"""

import time
from pathlib import Path

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles

from auth.router import router as auth_router, profile_router
from admin.router import router as admin_router
from applications.router import router as applications_router
from claims.router import router as claims_router
from contact.router import router as contact_router, callback_router
from dashboard.router import router as dashboard_router
from documents.router import router as documents_router
from news.router import router as news_router
from quotes.router import router as quotes_router
from uploads.router import router as uploads_router
from whistleblowing.router import router as whistleblowing_router
from core.config import settings
from core.guard import DashboardGuardMiddleware
from core.locale import LocaleRedirectMiddleware
from core.logger import logger
from core.responses import register_exception_handlers
from core.security import get_client_ip

app = FastAPI(title="MOHA Insurance", version="1.0.0")

register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Bodies (sign-in payloads, form submissions) are NOT echoed – only the
# URL and metadata are recorded.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            get_client_ip(request),
            response.status_code,
            elapsed_ms,
        )
        return response


# Starlette runs the last-added middleware first:
# request log -> CORS -> locale redirect -> dashboard guard -> oauth session -> routes
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.oauth_session_cookie_name,
    max_age=600,
    same_site="lax",
    https_only=settings.session_cookie_secure,
)
app.add_middleware(DashboardGuardMiddleware)
app.add_middleware(
    LocaleRedirectMiddleware,
    locales=settings.locales,
    default_locale=settings.default_locale,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)
app.add_middleware(_RequestLogMiddleware)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(admin_router)
app.include_router(claims_router)
app.include_router(quotes_router)
app.include_router(applications_router)
app.include_router(whistleblowing_router)
app.include_router(documents_router)
app.include_router(news_router)
app.include_router(contact_router)
app.include_router(callback_router)
app.include_router(uploads_router)
app.include_router(dashboard_router)

# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.on_event("startup")
async def _on_startup():
    logger.info("MOHA Insurance service starting up (media backend: %s)", settings.media_backend)


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("MOHA Insurance service shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Static files – media and frontend
# ---------------------------------------------------------------------------
if settings.media_backend == "local":
    app.mount(
        settings.media_url_prefix,
        StaticFiles(directory=settings.media_root, check_dir=False),
        name="media",
    )

# Mounted *after* the API routers so that /api/* is handled by FastAPI
# first.  ``html=True`` serves index.html for directory requests such as
# /en/ and /dashboard/.
_FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"

if _FRONTEND_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_FRONTEND_DIR), html=True), name="frontend")
