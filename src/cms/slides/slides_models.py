"""Slide domain dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

# Carousel capacity: display indexes run from 0 to SLIDE_INDEX_SLOTS - 1.
SLIDE_INDEX_SLOTS = 15


@dataclass(slots=True)
class Slide:
    id: int
    caption: str
    index: int
    image_name: str


@dataclass(slots=True)
class IndexChoice:
    value: int
    selected: bool = False


@dataclass(slots=True)
class SlideEditorView:
    """Values needed to render the create/edit slide form."""

    is_edit: bool
    slide_id: int | None = None
    image_name: str = ""
    caption: str = ""
    index: int | None = None
    index_choices: list[IndexChoice] = field(default_factory=list)


def is_valid_index(value: int) -> bool:
    return 0 <= value < SLIDE_INDEX_SLOTS
