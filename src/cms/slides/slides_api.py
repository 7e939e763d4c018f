"""Slide content routes (listing, editor, CRUD)."""

from __future__ import annotations

from typing import Any

from fastapi import (
    APIRouter,
    Body,
    Depends,
    File,
    Form,
    Path,
    Query,
    Request,
    UploadFile,
)

from ..api.errors import not_found_error
from ..auth.auth_dependencies import require_admin
from ..auth.auth_service import Principal
from ..config import UploadLimits
from ..db.db_ids import MAX_ROW_ID, MIN_ROW_ID
from ..ui.editors import render_slide_editor
from .slides_editor import build_slide_editor
from .slides_errors import UnsupportedMediaError
from .slides_repository import SlideRepository
from .slides_schemas import EditorResponse, SlideResponse, SlideUploadResponse
from .slides_service import SlideService

router = APIRouter(prefix="/api/content/slides", tags=["slides"])


def get_slide_repo(request: Request) -> SlideRepository:
    try:
        return request.app.state.slide_repo  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("SlideRepository is not configured") from exc


def get_slide_service(request: Request) -> SlideService:
    try:
        return request.app.state.slide_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("SlideService is not configured") from exc


def get_upload_limits(request: Request) -> UploadLimits:
    try:
        return request.app.state.config.upload_limits  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("AppConfig is not configured") from exc


def _check_content_type(upload: UploadFile, limits: UploadLimits) -> None:
    if upload.content_type not in set(limits.allowed_content_types):
        raise UnsupportedMediaError(
            f"Unsupported image type {upload.content_type or 'unknown'}"
        )


@router.get("")
def list_slides(
    slide_repo: SlideRepository = Depends(get_slide_repo),
) -> list[SlideResponse]:
    slides = slide_repo.list_ordered()
    if not slides:
        raise not_found_error("No slides found.")
    return [SlideResponse.from_domain(slide) for slide in slides]


@router.get("/editor")
def slide_editor(
    slide_id: str | None = Query(None, alias="id"),
    slide_repo: SlideRepository = Depends(get_slide_repo),
    _: Principal = Depends(require_admin),
) -> EditorResponse:
    view = build_slide_editor(slide_repo, slide_id)
    return EditorResponse(html=render_slide_editor(view), is_edit=view.is_edit)


@router.get("/by-image/{image_name}")
def fetch_slide_by_image(
    image_name: str,
    slide_repo: SlideRepository = Depends(get_slide_repo),
) -> SlideResponse:
    slide = slide_repo.find_by_image_name(image_name)
    if slide is None:
        raise not_found_error(f'No slide uses image "{image_name}".')
    return SlideResponse.from_domain(slide)


@router.get("/{slide_id}")
def fetch_slide(
    slide_id: int = Path(ge=MIN_ROW_ID, le=MAX_ROW_ID),
    slide_repo: SlideRepository = Depends(get_slide_repo),
) -> SlideResponse:
    slide = slide_repo.find_by_id(slide_id)
    if slide is None:
        raise not_found_error(f'Slide ID "{slide_id}" is invalid.')
    return SlideResponse.from_domain(slide)


@router.post("")
def create_slide(
    img: UploadFile = File(...),
    caption: str = Form(...),
    index: str = Form(...),
    image_name: str | None = Form(None),
    service: SlideService = Depends(get_slide_service),
    limits: UploadLimits = Depends(get_upload_limits),
    _: Principal = Depends(require_admin),
) -> SlideResponse:
    _check_content_type(img, limits)
    slide = service.create(
        caption=caption,
        index=index,
        image_name=image_name or img.filename or "",
        source=img.file,
    )
    return SlideResponse.from_domain(slide)


@router.post("/images")
def upload_slide_image(
    img: UploadFile = File(...),
    image_name: str | None = Form(None),
    service: SlideService = Depends(get_slide_service),
    limits: UploadLimits = Depends(get_upload_limits),
    _: Principal = Depends(require_admin),
) -> SlideUploadResponse:
    """Store a replacement image ahead of an ``image_name`` update."""
    _check_content_type(img, limits)
    name = image_name or img.filename or ""
    service.upload_image(image_name=name, source=img.file)
    return SlideUploadResponse(image_name=name, image_url=f"/img/slides/{name}")


@router.put("")
def update_slide(
    patch: dict[str, Any] = Body(...),
    service: SlideService = Depends(get_slide_service),
    _: Principal = Depends(require_admin),
) -> SlideResponse:
    return SlideResponse.from_domain(service.update(patch))


@router.delete("/{slide_id}")
def delete_slide(
    slide_id: int = Path(ge=MIN_ROW_ID, le=MAX_ROW_ID),
    service: SlideService = Depends(get_slide_service),
    _: Principal = Depends(require_admin),
) -> dict[str, Any]:
    service.delete(slide_id)
    return {"deleted": slide_id}
