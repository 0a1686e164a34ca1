# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Page / limit query parameters and the newest-first paginated query."""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from fastapi import Query
from sqlalchemy import or_
from sqlalchemy.orm import Query as OrmQuery

from core.responses import Pagination

MAX_LIMIT = 100


@dataclass
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(default_limit: int = 10):
    """Build a dependency reading ``page`` (1-based) and ``limit``."""

    def _dependency(
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: int = Query(default_limit, ge=1, le=MAX_LIMIT, description="Rows per page"),
    ) -> PageParams:
        return PageParams(page=page, limit=limit)

    return _dependency


def escape_like(text: str) -> str:
    """Make LIKE wildcards in user input match literally (escape char: backslash)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_filter(q: OrmQuery, search: Optional[str], *columns) -> OrmQuery:
    """Case-insensitive substring match of *search* over any of *columns*."""
    if search and search.strip():
        pattern = f"%{escape_like(search.strip())}%"
        q = q.filter(or_(*(col.ilike(pattern, escape="\\") for col in columns)))
    return q


def paginate(q: OrmQuery, params: PageParams, *order_by: Any) -> Tuple[List[Any], Pagination]:
    """Run *q* for one page.  Returns the rows and the pagination block."""
    total = q.order_by(None).count()
    rows = q.order_by(*order_by).offset(params.offset).limit(params.limit).all()
    return rows, Pagination(
        total=total,
        page=params.page,
        limit=params.limit,
        total_pages=math.ceil(total / params.limit),
    )
