"""Dependency wiring helpers."""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api.errors import register_error_handlers
from .articles.articles_api import router as articles_router
from .articles.articles_repository import ArticleRepository
from .auth.auth_api import router as auth_router
from .auth.auth_service import AuthService
from .config import AppConfig
from .slides.slide_assets import SlideAssetStore
from .slides.slides_api import router as slides_router
from .slides.slides_repository import SlideRepository
from .slides.slides_service import SlideService


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    slide_repo = SlideRepository(config.session_factory)
    slide_assets = SlideAssetStore(
        root=config.media_paths.slides,
        chunk_size=config.upload_limits.chunk_size_bytes,
        max_bytes=config.upload_limits.absolute_cap_bytes,
    )
    slide_service = SlideService(repo=slide_repo, assets=slide_assets)
    article_repo = ArticleRepository(config.session_factory)
    auth_service = AuthService.from_file(
        path=config.admin_credentials_path,
        signing_key=config.jwt_signing_key,
        token_ttl_hours=config.admin_jwt_ttl_hours,
    )

    app.state.config = config
    app.state.slide_repo = slide_repo
    app.state.slide_assets = slide_assets
    app.state.slide_service = slide_service
    app.state.article_repo = article_repo
    app.state.auth_service = auth_service

    register_error_handlers(app)
    app.include_router(auth_router)
    app.include_router(slides_router)
    app.include_router(articles_router)

    app.mount(
        "/img/slides",
        StaticFiles(directory=config.media_paths.slides, check_dir=False),
        name="slide-images",
    )
