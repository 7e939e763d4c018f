"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db


@dataclass(slots=True)
class UploadLimits:
    allowed_content_types: Sequence[str]
    absolute_cap_bytes: int
    chunk_size_bytes: int


@dataclass(slots=True)
class MediaPaths:
    root: Path
    slides: Path


@dataclass(slots=True)
class AppConfig:
    media_paths: MediaPaths
    upload_limits: UploadLimits
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    jwt_signing_key: str
    admin_credentials_path: Path
    admin_jwt_ttl_hours: int
    orphan_grace_seconds: int


def _ensure_media_paths(paths: MediaPaths) -> None:
    paths.root.mkdir(parents=True, exist_ok=True)
    paths.slides.mkdir(parents=True, exist_ok=True)


def build_engine(database_url: str) -> tuple[Engine, sessionmaker[Session]]:
    engine = create_engine(database_url, future=True)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)
    return engine, session_factory


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    root = Path(os.getenv("MEDIA_ROOT", "media"))
    media_paths = MediaPaths(root=root, slides=root / "slides")
    _ensure_media_paths(media_paths)

    upload_limits = UploadLimits(
        allowed_content_types=("image/jpeg", "image/png", "image/gif", "image/webp"),
        absolute_cap_bytes=int(os.getenv("UPLOAD_ABSOLUTE_CAP_BYTES", 10 * 1024 * 1024)),
        chunk_size_bytes=int(os.getenv("UPLOAD_CHUNK_SIZE_BYTES", 1 * 1024 * 1024)),
    )

    database_url = os.getenv("DATABASE_URL", "sqlite:///rms_content.db")
    engine, session_factory = build_engine(database_url)

    init_db(engine)

    return AppConfig(
        media_paths=media_paths,
        upload_limits=upload_limits,
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        jwt_signing_key=os.getenv("JWT_SIGNING_KEY", ""),
        admin_credentials_path=Path(
            os.getenv("ADMIN_CREDENTIALS_PATH", "secrets/runtime_credentials.json")
        ),
        admin_jwt_ttl_hours=int(os.getenv("ADMIN_JWT_TTL_HOURS", 24)),
        orphan_grace_seconds=int(os.getenv("ORPHAN_GRACE_SECONDS", 15 * 60)),
    )
