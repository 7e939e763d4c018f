"""Slide lifecycle: keeps slide rows and their image files in step."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, BinaryIO

import structlog

from ..db.db_ids import fits_int_column
from ..exceptions import AssetIOError, IntegrityConstraintViolation, StorageError
from .slide_assets import SlideAssetStore, validate_asset_name
from .slides_errors import (
    AssetMissingError,
    DuplicateAssetError,
    DuplicateIdError,
    InvalidValueError,
    MissingLocatorError,
    SlideNotFoundError,
    UnknownFieldError,
)
from .slides_models import SLIDE_INDEX_SLOTS, Slide, is_valid_index
from .slides_repository import SlideRepository

logger = structlog.get_logger(__name__)

LOCATOR_FIELD = "id"
REKEY_FIELD = "slideid"
PATCH_FIELDS = frozenset({REKEY_FIELD, "caption", "index", "image_name"})


def _as_int(field_name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidValueError(f"{field_name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise InvalidValueError(f"{field_name} must be an integer") from exc
    raise InvalidValueError(f"{field_name} must be an integer")


def _as_column_int(field_name: str, value: Any) -> int:
    number = _as_int(field_name, value)
    if not fits_int_column(number):
        raise InvalidValueError(f"{field_name} is out of range")
    return number


def _as_locator(value: Any) -> int:
    slide_id = _as_int(LOCATOR_FIELD, value)
    if not fits_int_column(slide_id):
        raise SlideNotFoundError(slide_id)
    return slide_id


def _as_text(field_name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(f"{field_name} must be a string")
    return value


@dataclass(slots=True)
class _ValidatedPatch:
    changes: dict[str, Any]
    superseded_image: str | None = None

    @property
    def field_count(self) -> int:
        return len(self.changes)


class SlideService:
    """Sole writer of slide rows and slide image files."""

    def __init__(self, repo: SlideRepository, assets: SlideAssetStore) -> None:
        self._repo = repo
        self._assets = assets

    def create(
        self,
        *,
        caption: str,
        index: Any,
        image_name: str,
        source: bytes | BinaryIO,
    ) -> Slide:
        """Store the uploaded image and insert its slide row."""
        if not caption or not caption.strip():
            raise InvalidValueError("caption must not be empty")
        index = _as_int("index", index)
        if not is_valid_index(index):
            raise InvalidValueError(
                f"index must be between 0 and {SLIDE_INDEX_SLOTS - 1}"
            )
        validate_asset_name(image_name)
        if self._repo.find_by_image_name(image_name) is not None:
            raise DuplicateAssetError(image_name)

        replaced_orphan = self._assets.exists(image_name)
        self._assets.store(image_name, source)
        if replaced_orphan:
            logger.info("slides.create.orphan_replaced", image_name=image_name)

        try:
            slide = self._repo.insert(caption=caption, index=index, image_name=image_name)
        except IntegrityConstraintViolation as exc:
            # A concurrent create claimed the name first; its row owns the file now.
            logger.warning("slides.create.race_lost", image_name=image_name)
            raise DuplicateAssetError(image_name) from exc
        except StorageError:
            self._discard_asset(image_name, reason="insert_failed")
            raise

        logger.info(
            "slides.create.done",
            slide_id=slide.id,
            image_name=image_name,
            index=index,
        )
        return slide

    def upload_image(self, *, image_name: str, source: bytes | BinaryIO) -> None:
        """Store a replacement image ahead of an ``image_name`` update."""
        validate_asset_name(image_name)
        if self._repo.find_by_image_name(image_name) is not None:
            raise DuplicateAssetError(image_name)
        self._assets.store(image_name, source)
        logger.info("slides.upload.done", image_name=image_name)

    def update(self, patch: Mapping[str, Any]) -> Slide:
        """Apply a partial update; ``patch["id"]`` locates the slide."""
        if LOCATOR_FIELD not in patch:
            raise MissingLocatorError()
        for key in patch:
            if key != LOCATOR_FIELD and key not in PATCH_FIELDS:
                raise UnknownFieldError(key)

        current = self._repo.get_by_id(_as_locator(patch[LOCATOR_FIELD]))
        validated = self._validate_patch(current, patch)
        if validated.field_count == 0:
            return current

        changes = dict(validated.changes)
        if REKEY_FIELD in changes:
            changes[LOCATOR_FIELD] = changes.pop(REKEY_FIELD)
        updated = self._repo.update_fields(current.id, changes)

        if validated.superseded_image:
            self._discard_asset(validated.superseded_image, reason="superseded")
        logger.info(
            "slides.update.done",
            slide_id=current.id,
            new_slide_id=updated.id,
            fields=sorted(validated.changes),
        )
        return updated

    def delete(self, slide_id: Any) -> None:
        """Remove the slide row, then its image."""
        slide = self._repo.get_by_id(_as_locator(slide_id))
        self._repo.delete(slide.id)
        self._discard_asset(slide.image_name, reason="deleted")
        logger.info("slides.delete.done", slide_id=slide.id, image_name=slide.image_name)

    def purge_orphan_assets(
        self,
        *,
        grace_seconds: float = 0.0,
        dry_run: bool = False,
        now: float | None = None,
    ) -> list[str]:
        """Remove image files that no slide references.

        Temporary files left by interrupted writes are swept too. Files younger
        than ``grace_seconds`` are kept, since a create may have stored its
        image without inserting the row yet.
        """
        referenced = self._repo.list_image_names()
        reference_time = time.time() if now is None else now
        orphans = [
            name
            for name in self._assets.list_names()
            if name not in referenced
            and reference_time - self._assets.modified_at(name) >= grace_seconds
        ]
        stale_partials = [
            name
            for name in self._assets.list_partials()
            if reference_time - self._assets.partial_modified_at(name) >= grace_seconds
        ]
        if dry_run:
            return orphans + stale_partials
        for name in orphans:
            self._assets.remove(name)
        for name in stale_partials:
            self._assets.remove_partial(name)
        if orphans or stale_partials:
            logger.info(
                "slides.orphans.purged",
                count=len(orphans),
                partials=len(stale_partials),
            )
        return orphans + stale_partials

    def _validate_patch(self, current: Slide, patch: Mapping[str, Any]) -> _ValidatedPatch:
        validated = _ValidatedPatch(changes={})

        if REKEY_FIELD in patch:
            target_id = _as_column_int(REKEY_FIELD, patch[REKEY_FIELD])
            if target_id != current.id and self._repo.find_by_id(target_id) is not None:
                raise DuplicateIdError(target_id)
            validated.changes[REKEY_FIELD] = target_id

        if "caption" in patch:
            validated.changes["caption"] = _as_text("caption", patch["caption"])

        if "index" in patch:
            validated.changes["index"] = _as_column_int("index", patch["index"])

        if "image_name" in patch:
            image_name = _as_text("image_name", patch["image_name"])
            if image_name != current.image_name:
                validate_asset_name(image_name)
                owner = self._repo.find_by_image_name(image_name)
                if owner is not None and owner.id != current.id:
                    raise DuplicateAssetError(image_name)
                if not self._assets.exists(image_name):
                    raise AssetMissingError(image_name)
                validated.superseded_image = current.image_name
            validated.changes["image_name"] = image_name

        return validated

    def _discard_asset(self, image_name: str, *, reason: str) -> None:
        try:
            self._assets.remove(image_name)
        except AssetIOError:
            logger.exception(
                "slides.asset.remove_failed", image_name=image_name, reason=reason
            )
