"""Pydantic schemas for the slide API."""

from __future__ import annotations

from pydantic import BaseModel

from .slides_models import Slide


class SlideResponse(BaseModel):
    id: int
    caption: str
    index: int
    image_name: str
    image_url: str

    @classmethod
    def from_domain(cls, slide: Slide) -> "SlideResponse":
        return cls(
            id=slide.id,
            caption=slide.caption,
            index=slide.index,
            image_name=slide.image_name,
            image_url=f"/img/slides/{slide.image_name}",
        )


class SlideUploadResponse(BaseModel):
    image_name: str
    image_url: str


class EditorResponse(BaseModel):
    html: str
    is_edit: bool
