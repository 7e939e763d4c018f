from __future__ import annotations

import pytest

from src.cms.exceptions import IntegrityConstraintViolation
from src.cms.slides.slides_errors import SlideNotFoundError
from src.cms.slides.slides_repository import SlideRepository


def test_list_ordered_sorts_by_index_then_insertion(session_factory) -> None:
    repo = SlideRepository(session_factory)
    assert repo.list_ordered() == []

    late = repo.insert(caption="late", index=5, image_name="late.png")
    first_tie = repo.insert(caption="tie-1", index=1, image_name="t1.png")
    second_tie = repo.insert(caption="tie-2", index=1, image_name="t2.png")

    ordered = repo.list_ordered()

    assert [slide.id for slide in ordered] == [first_tie.id, second_tie.id, late.id]


def test_lookups_by_id_and_image_name(session_factory) -> None:
    repo = SlideRepository(session_factory)
    slide = repo.insert(caption="Robot arm", index=3, image_name="arm.png")

    assert repo.get_by_id(slide.id) == slide
    assert repo.get_by_image_name("arm.png") == slide
    assert repo.find_by_image_name("missing.png") is None
    with pytest.raises(SlideNotFoundError):
        repo.get_by_id(slide.id + 100)
    with pytest.raises(SlideNotFoundError):
        repo.get_by_image_name("missing.png")


def test_image_name_is_unique_in_storage(session_factory) -> None:
    repo = SlideRepository(session_factory)
    repo.insert(caption="one", index=0, image_name="same.png")

    with pytest.raises(IntegrityConstraintViolation):
        repo.insert(caption="two", index=1, image_name="same.png")


def test_update_fields_can_change_id(session_factory) -> None:
    repo = SlideRepository(session_factory)
    slide = repo.insert(caption="one", index=0, image_name="one.png")

    updated = repo.update_fields(slide.id, {"id": 77, "caption": "renamed", "image_name": "new.png"})

    assert updated.id == 77
    assert updated.caption == "renamed"
    assert updated.image_name == "new.png"
    assert repo.find_by_id(slide.id) is None


def test_update_fields_rejects_unknown_columns(session_factory) -> None:
    repo = SlideRepository(session_factory)
    slide = repo.insert(caption="one", index=0, image_name="one.png")

    with pytest.raises(ValueError):
        repo.update_fields(slide.id, {"slideid": 3})


def test_delete_missing_row_raises(session_factory) -> None:
    repo = SlideRepository(session_factory)
    slide = repo.insert(caption="one", index=0, image_name="one.png")

    repo.delete(slide.id)

    with pytest.raises(SlideNotFoundError):
        repo.delete(slide.id)
    assert repo.list_image_names() == set()
