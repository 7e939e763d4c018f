"""Server-rendered HTML fragments for the admin editors."""

from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates

from ..articles.articles_models import Article
from ..slides.slides_models import SlideEditorView

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

SLIDE_IMAGE_BASE_URL = "/img/slides"


def render_slide_editor(view: SlideEditorView) -> str:
    template = TEMPLATES.get_template("slide_editor.html")
    return template.render(view=view, image_base_url=SLIDE_IMAGE_BASE_URL)


def render_article_editor(article: Article | None) -> str:
    template = TEMPLATES.get_template("article_editor.html")
    return template.render(article=article)
