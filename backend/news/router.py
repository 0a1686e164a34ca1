# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
News endpoints.  Articles are written as drafts in the dashboard and shown
on the public site once PUBLISHED; the public list is ordered by publication
date, newest first.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.logger import logger
from core.pagination import PageParams, page_params, paginate, search_filter
from core.records import delete_or_404, get_or_404
from core.responses import Envelope, Message, ok
from core.roles import ADMIN
from core.security import SessionUser, get_session, optional_user, require_auth
from core.validation import (
    bad_request,
    clean_optional,
    require_choice,
    require_fields,
    require_min_length,
    sanitize_input,
    updated_text,
)
from models.news import NEWS_STATUSES, News
from news.schemas import NewsCreate, NewsListResponse, NewsResponse, NewsUpdate

router = APIRouter(prefix="/api/news", tags=["news"])

_PUBLISHED = "PUBLISHED"
_TITLE_MIN = 5
_CONTENT_MIN = 50
_TITLE_SHORT = f"Title must be at least {_TITLE_MIN} characters long"
_CONTENT_SHORT = f"Content must be at least {_CONTENT_MIN} characters long"


@router.get("", response_model=Envelope[NewsListResponse])
def list_news(
    status_: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    params: PageParams = Depends(page_params()),
    session: Optional[SessionUser] = Depends(get_session),
    db: Session = Depends(get_db),
):
    """Published articles for visitors; staff may also list drafts."""
    viewer = optional_user(session, db)

    q = db.query(News)
    if viewer is None:
        q = q.filter(News.status == _PUBLISHED)
    elif status_:
        q = q.filter(News.status == require_choice(status_, NEWS_STATUSES))
    if category:
        q = q.filter(News.category == category)
    q = search_filter(q, search, News.title, News.content)

    news, pagination = paginate(q, params, News.published_date.desc(), News.id.desc())
    return ok(NewsListResponse(news=news, pagination=pagination))


@router.post("", response_model=Envelope[NewsResponse], status_code=status.HTTP_201_CREATED)
def create_news(
    body: NewsCreate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    require_fields(body.title, body.content, body.category)
    title = require_min_length(body.title, _TITLE_MIN, _TITLE_SHORT)
    content = require_min_length(body.content, _CONTENT_MIN, _CONTENT_SHORT)

    article = News(
        title=title,
        content=content,
        category=sanitize_input(body.category),
        image_url=clean_optional(body.image_url),
        author=current.name or "Admin",
        author_id=current.id,
        status=require_choice(body.status or NEWS_STATUSES[0], NEWS_STATUSES),
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    logger.info("user_id=%s created news id=%s (%s)", current.id, article.id, article.status)
    return ok(article)


@router.get("/{news_id}", response_model=Envelope[NewsResponse])
def get_news(
    news_id: int,
    session: Optional[SessionUser] = Depends(get_session),
    db: Session = Depends(get_db),
):
    article = get_or_404(db, News, news_id, "News article")
    if article.status != _PUBLISHED and optional_user(session, db) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="News article not found")
    return ok(article)


@router.patch("/{news_id}", response_model=Envelope[NewsResponse])
def update_news(
    news_id: int,
    body: NewsUpdate,
    current: SessionUser = Depends(require_auth()),
    db: Session = Depends(get_db),
):
    """
    Partial update.  Publishing a draft moves its publication date to now so
    it appears at the top of the public list.
    """
    article = get_or_404(db, News, news_id, "News article")
    fields = body.model_fields_set
    if not fields:
        raise bad_request("No fields to update")

    if "title" in fields:
        require_fields(body.title)
        article.title = require_min_length(body.title, _TITLE_MIN, _TITLE_SHORT)
    if "content" in fields:
        require_fields(body.content)
        article.content = require_min_length(body.content, _CONTENT_MIN, _CONTENT_SHORT)
    if "category" in fields:
        article.category = updated_text(body.category, required=True)
    if "image_url" in fields:
        article.image_url = updated_text(body.image_url)
    if "status" in fields:
        new_status = require_choice(body.status, NEWS_STATUSES)
        if new_status == _PUBLISHED and article.status != _PUBLISHED:
            article.published_date = datetime.now(timezone.utc)
        article.status = new_status

    db.commit()
    db.refresh(article)
    logger.info("user_id=%s updated news id=%s (%s)", current.id, article.id, ", ".join(sorted(fields)))
    return ok(article)


@router.delete("/{news_id}", response_model=Envelope[Message])
def delete_news(
    news_id: int,
    current: SessionUser = Depends(require_auth(ADMIN)),
    db: Session = Depends(get_db),
):
    delete_or_404(db, News, news_id, "News article", current.id)
    return ok(Message(message="News article deleted successfully"))
