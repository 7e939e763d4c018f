"""Article repository backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.db_models import ArticleModel
from ..exceptions import handle_sqlalchemy_errors
from .articles_models import Article


class ArticleRepository:
    """Read access to content articles."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_articles(self) -> Sequence[Article]:
        with handle_sqlalchemy_errors(entity="article"), self._session_factory() as session:
            rows = session.scalars(
                select(ArticleModel).order_by(
                    ArticleModel.pageid, ArticleModel.index, ArticleModel.id
                )
            ).all()
            return [self._to_domain(row) for row in rows]

    def list_by_page(self, pageid: int) -> Sequence[Article]:
        with handle_sqlalchemy_errors(entity="article"), self._session_factory() as session:
            rows = session.scalars(
                select(ArticleModel)
                .where(ArticleModel.pageid == pageid)
                .order_by(ArticleModel.index, ArticleModel.id)
            ).all()
            return [self._to_domain(row) for row in rows]

    def find_by_id(self, article_id: int) -> Article | None:
        with handle_sqlalchemy_errors(entity="article"), self._session_factory() as session:
            row = session.get(ArticleModel, article_id)
            return self._to_domain(row) if row is not None else None

    @staticmethod
    def _to_domain(model: ArticleModel) -> Article:
        return Article(
            id=model.id,
            title=model.title,
            content=model.content,
            pageid=model.pageid,
            index=model.index,
        )
