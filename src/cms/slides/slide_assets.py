"""Filesystem storage for slide images."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from ..exceptions import AssetIOError
from .slides_errors import InvalidAssetNameError, PayloadTooLargeError

CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB
_PARTIAL_SUFFIX = ".partial"


def validate_asset_name(name: str) -> str:
    """Return ``name`` if it is a plain filename safe to place in the asset dir."""
    if (
        not name
        or name in {".", ".."}
        or name.startswith(".")
        or "\x00" in name
        or "/" in name
        or "\\" in name
        or Path(name).name != name
    ):
        raise InvalidAssetNameError(name)
    return name


@dataclass(slots=True)
class SlideAssetStore:
    """Read and write slide images in a flat directory addressed by filename.

    The store knows nothing about slide rows; deciding whether a write or a
    removal is allowed is left to the slide service.
    """

    root: Path
    chunk_size: int = CHUNK_SIZE
    max_bytes: int | None = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def path_for(self, name: str) -> Path:
        return self.root / validate_asset_name(name)

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except InvalidAssetNameError:
            return False

    def list_names(self) -> list[str]:
        if not self.root.exists():
            return []
        return sorted(
            entry.name
            for entry in self.root.iterdir()
            if entry.is_file() and not entry.name.startswith(".")
        )

    def list_partials(self) -> list[str]:
        """Temporary files left behind by writes that never completed."""
        if not self.root.exists():
            return []
        return sorted(
            entry.name
            for entry in self.root.glob(f".*{_PARTIAL_SUFFIX}")
            if entry.is_file()
        )

    def modified_at(self, name: str) -> float:
        try:
            return self.path_for(name).stat().st_mtime
        except OSError as exc:
            raise AssetIOError(f"Cannot stat image {name}") from exc

    def store(self, name: str, source: bytes | BinaryIO) -> Path:
        """Write ``source`` under ``name``, replacing any existing file."""
        target = self.path_for(name)
        partial = self.root / f".{uuid.uuid4().hex}{_PARTIAL_SUFFIX}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            written = self._write(partial, source)
            os.replace(partial, target)
        except PayloadTooLargeError:
            partial.unlink(missing_ok=True)
            raise
        except OSError as exc:
            partial.unlink(missing_ok=True)
            self.log.error(
                "slides.asset.write_failed",
                extra={"image_name": name, "path": str(target)},
                exc_info=exc,
            )
            raise AssetIOError(f"Failed to store image {name}") from exc
        self.log.info(
            "slides.asset.stored",
            extra={"image_name": name, "size_bytes": written},
        )
        return target

    def remove(self, name: str) -> bool:
        """Delete the named image; a missing file is not an error."""
        target = self.path_for(name)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise AssetIOError(f"Failed to remove image {name}") from exc
        self.log.info("slides.asset.removed", extra={"image_name": name})
        return True

    def partial_modified_at(self, name: str) -> float:
        try:
            return self._partial_path(name).stat().st_mtime
        except OSError as exc:
            raise AssetIOError(f"Cannot stat temporary file {name}") from exc

    def remove_partial(self, name: str) -> bool:
        target = self._partial_path(name)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise AssetIOError(f"Failed to remove temporary file {name}") from exc
        self.log.info("slides.asset.partial_removed", extra={"file_name": name})
        return True

    def _partial_path(self, name: str) -> Path:
        if (
            not name.startswith(".")
            or not name.endswith(_PARTIAL_SUFFIX)
            or Path(name).name != name
            or "\\" in name
        ):
            raise InvalidAssetNameError(name)
        return self.root / name

    def _write(self, destination: Path, source: bytes | BinaryIO) -> int:
        if isinstance(source, (bytes, bytearray)):
            self._check_size(len(source))
            destination.write_bytes(source)
            return len(source)

        size = 0
        with destination.open("wb") as sink:
            while True:
                chunk = source.read(self.chunk_size)
                if not chunk:
                    break
                size += len(chunk)
                self._check_size(size)
                sink.write(chunk)
        return size

    def _check_size(self, size: int) -> None:
        if self.max_bytes is not None and size > self.max_bytes:
            raise PayloadTooLargeError(
                f"Upload of {size} bytes exceeds the {self.max_bytes} byte limit"
            )
