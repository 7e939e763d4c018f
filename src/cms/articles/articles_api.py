"""Content article routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, Request
from pydantic import BaseModel

from ..api.errors import not_found_error
from ..auth.auth_dependencies import require_admin
from ..auth.auth_service import Principal
from ..db.db_ids import MAX_ROW_ID, MIN_ROW_ID, coerce_row_id
from ..ui.editors import render_article_editor
from .articles_models import Article
from .articles_repository import ArticleRepository

router = APIRouter(prefix="/api/content/articles", tags=["articles"])


class ArticleResponse(BaseModel):
    id: int
    title: str
    content: str
    pageid: int
    index: int

    @classmethod
    def from_domain(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            pageid=article.pageid,
            index=article.index,
        )


class ArticleEditorResponse(BaseModel):
    html: str
    is_edit: bool


def get_article_repo(request: Request) -> ArticleRepository:
    try:
        return request.app.state.article_repo  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("ArticleRepository is not configured") from exc


@router.get("")
def list_articles(
    pageid: int | None = Query(None, ge=MIN_ROW_ID, le=MAX_ROW_ID),
    repo: ArticleRepository = Depends(get_article_repo),
) -> list[ArticleResponse]:
    if pageid is None:
        articles = repo.list_articles()
        if not articles:
            raise not_found_error("No content articles found.")
    else:
        articles = repo.list_by_page(pageid)
        if not articles:
            raise not_found_error(f'No articles with content page ID "{pageid}" found.')
    return [ArticleResponse.from_domain(article) for article in articles]


@router.get("/editor")
def article_editor(
    article_id: str | None = Query(None, alias="id"),
    repo: ArticleRepository = Depends(get_article_repo),
    _: Principal = Depends(require_admin),
) -> ArticleEditorResponse:
    resolved = coerce_row_id(article_id)
    article = repo.find_by_id(resolved) if resolved is not None else None
    return ArticleEditorResponse(
        html=render_article_editor(article), is_edit=article is not None
    )


@router.get("/{article_id}")
def fetch_article(
    article_id: int = Path(ge=MIN_ROW_ID, le=MAX_ROW_ID),
    repo: ArticleRepository = Depends(get_article_repo),
) -> ArticleResponse:
    article = repo.find_by_id(article_id)
    if article is None:
        raise not_found_error(f'Article ID "{article_id}" is invalid.')
    return ArticleResponse.from_domain(article)
