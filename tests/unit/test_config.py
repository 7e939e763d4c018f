from pathlib import Path

from sqlalchemy import inspect

from src.cms.config import load_config


def test_load_config_reads_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'content.db'}")
    monkeypatch.setenv("UPLOAD_ABSOLUTE_CAP_BYTES", "2048")
    monkeypatch.setenv("ORPHAN_GRACE_SECONDS", "30")
    monkeypatch.setenv("ADMIN_CREDENTIALS_PATH", str(tmp_path / "creds.json"))

    config = load_config()

    try:
        assert config.media_paths.slides == tmp_path / "media" / "slides"
        assert config.media_paths.slides.is_dir()
        assert config.upload_limits.absolute_cap_bytes == 2048
        assert "image/png" in config.upload_limits.allowed_content_types
        assert config.orphan_grace_seconds == 30
        assert config.admin_credentials_path == tmp_path / "creds.json"
        assert config.jwt_signing_key == "test-signing-key"
    finally:
        config.engine.dispose()


def test_load_config_creates_schema(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'content.db'}")

    config = load_config()

    try:
        tables = set(inspect(config.engine).get_table_names())
        assert {"slides", "articles"} <= tables
    finally:
        config.engine.dispose()
