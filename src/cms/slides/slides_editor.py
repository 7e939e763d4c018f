"""Read-side projection backing the slide editor form."""

from __future__ import annotations

from typing import Any

from ..db.db_ids import coerce_row_id
from .slides_models import SLIDE_INDEX_SLOTS, IndexChoice, SlideEditorView
from .slides_repository import SlideRepository


def build_slide_editor(repo: SlideRepository, slide_id: Any = None) -> SlideEditorView:
    """Return prefilled values for ``slide_id`` or a blank create form.

    An id that does not resolve to a slide yields the blank form rather than
    an error.
    """
    resolved = coerce_row_id(slide_id)
    slide = repo.find_by_id(resolved) if resolved is not None else None

    current_index = slide.index if slide is not None else None
    choices = [
        IndexChoice(value=value, selected=value == current_index)
        for value in range(SLIDE_INDEX_SLOTS)
    ]
    if slide is None:
        return SlideEditorView(is_edit=False, index_choices=choices)
    return SlideEditorView(
        is_edit=True,
        slide_id=slide.id,
        image_name=slide.image_name,
        caption=slide.caption,
        index=slide.index,
        index_choices=choices,
    )
