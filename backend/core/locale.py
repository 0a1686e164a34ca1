# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Locale routing for public marketing pages.

Every public path carries a two-letter locale prefix (``/en/products``,
``/sw/claims``).  A request without one is redirected to the same path under
the visitor's locale: the ``NEXT_LOCALE`` cookie if it names a supported
locale, else the best ``Accept-Language`` match, else the default.

Dashboard, API, asset and documentation paths are never rewritten.
"""

from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

LOCALE_COOKIE = "NEXT_LOCALE"

EXCLUDED_PREFIXES = (
    "/dashboard",
    "/api",
    "/_next",
    "/_vercel",
    "/static",
    "/media",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
)


def is_excluded(path: str) -> bool:
    if any(path == p or path.startswith(p + "/") for p in EXCLUDED_PREFIXES):
        return True
    # anything that looks like a file: /robots.txt, /images/logo.png
    last = path.rsplit("/", 1)[-1]
    return "." in last


def path_locale(path: str, locales: Iterable[str]) -> Optional[str]:
    """The locale prefix of *path*, if it has a supported one."""
    first = path.lstrip("/").split("/", 1)[0]
    return first if first in tuple(locales) else None


def negotiate_locale(
    cookie_value: Optional[str],
    accept_language: Optional[str],
    locales: Iterable[str],
    default: str,
) -> str:
    locales = tuple(locales)
    if cookie_value in locales:
        return cookie_value

    # "sw-TZ,sw;q=0.9,en;q=0.8" → [(1.0, "sw"), (0.9, "sw"), (0.8, "en")]
    candidates = []
    for position, part in enumerate((accept_language or "").split(",")):
        lang, _, params = part.strip().partition(";")
        lang = lang.strip().lower().split("-", 1)[0]
        if not lang:
            continue
        q = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                q = float(params[2:])
            except ValueError:
                q = 0.0
        candidates.append((-q, position, lang))

    for _, _, lang in sorted(candidates):
        if lang in locales:
            return lang
    return default


def localized_path(path: str, locale: str) -> str:
    return f"/{locale}" if path in ("", "/") else f"/{locale}{path}"


class LocaleRedirectMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, locales: Iterable[str], default_locale: str):
        super().__init__(app)
        self.locales = tuple(locales)
        self.default_locale = default_locale

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if (
            request.method not in ("GET", "HEAD")
            or is_excluded(path)
            or path_locale(path, self.locales)
        ):
            return await call_next(request)

        locale = negotiate_locale(
            request.cookies.get(LOCALE_COOKIE),
            request.headers.get("Accept-Language"),
            self.locales,
            self.default_locale,
        )
        target = localized_path(path, locale)
        if request.url.query:
            target = f"{target}?{request.url.query}"
        return RedirectResponse(target, status_code=307)
