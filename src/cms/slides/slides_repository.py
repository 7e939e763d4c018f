"""Slide repository backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ..db.db_models import SlideModel
from ..exceptions import handle_sqlalchemy_errors
from .slides_errors import SlideNotFoundError
from .slides_models import Slide

UPDATABLE_COLUMNS = frozenset({"id", "caption", "index", "image_name"})


class SlideRepository:
    """Provide access to slide rows stored in the database.

    The repository does not validate patches: uniqueness of ``id`` and
    ``image_name`` and the pairing with asset files are checked by
    :class:`~src.cms.slides.slides_service.SlideService` before it writes.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_ordered(self) -> Sequence[Slide]:
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            rows = session.scalars(
                select(SlideModel).order_by(SlideModel.index, SlideModel.id)
            ).all()
            return [self._to_domain(row) for row in rows]

    def list_image_names(self) -> set[str]:
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            return set(session.scalars(select(SlideModel.image_name)).all())

    def get_by_id(self, slide_id: int) -> Slide:
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            row = session.get(SlideModel, slide_id)
            if row is None:
                raise SlideNotFoundError(slide_id)
            return self._to_domain(row)

    def find_by_id(self, slide_id: int) -> Slide | None:
        try:
            return self.get_by_id(slide_id)
        except SlideNotFoundError:
            return None

    def get_by_image_name(self, image_name: str) -> Slide:
        slide = self.find_by_image_name(image_name)
        if slide is None:
            raise SlideNotFoundError(image_name)
        return slide

    def find_by_image_name(self, image_name: str) -> Slide | None:
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            row = session.scalars(
                select(SlideModel).where(SlideModel.image_name == image_name)
            ).one_or_none()
            return self._to_domain(row) if row is not None else None

    def insert(self, *, caption: str, index: int, image_name: str) -> Slide:
        """Persist a new slide row; the asset must already be stored."""
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            row = SlideModel(caption=caption, index=index, image_name=image_name)
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_domain(row)

    def update_fields(self, slide_id: int, patch: Mapping[str, Any]) -> Slide:
        """Apply validated column changes to the row identified by ``slide_id``."""
        unknown = set(patch) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unsupported slide columns: {sorted(unknown)}")
        target_id = patch.get("id", slide_id)
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            if patch:
                result = session.execute(
                    update(SlideModel)
                    .where(SlideModel.id == slide_id)
                    .values({getattr(SlideModel, key): value for key, value in patch.items()})
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise SlideNotFoundError(slide_id)
                session.commit()
            row = session.get(SlideModel, target_id)
            if row is None:
                raise SlideNotFoundError(slide_id)
            return self._to_domain(row)

    def delete(self, slide_id: int) -> None:
        with handle_sqlalchemy_errors(entity="slide"), self._session_factory() as session:
            result = session.execute(delete(SlideModel).where(SlideModel.id == slide_id))
            if result.rowcount == 0:
                raise SlideNotFoundError(slide_id)
            session.commit()

    @staticmethod
    def _to_domain(model: SlideModel) -> Slide:
        return Slide(
            id=model.id,
            caption=model.caption,
            index=model.index,
            image_name=model.image_name,
        )
