from __future__ import annotations

import os
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from src.cms.config import build_engine
from src.cms.db.db_init import init_db


os.environ.setdefault("JWT_SIGNING_KEY", "test-signing-key")
os.environ.setdefault("ADMIN_JWT_TTL_HOURS", "1")


@pytest.fixture()
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    engine, factory = build_engine(f"sqlite:///{tmp_path / 'content.db'}")
    init_db(engine)
    yield factory
    engine.dispose()
