"""SQLAlchemy ORM models."""

from __future__ import annotations

from sqlalchemy import Integer, MetaData, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class that applies a deterministic naming convention."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class SlideModel(Base):
    __tablename__ = "slides"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    caption: Mapped[str] = mapped_column(Text, nullable=False)
    index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_name: Mapped[str] = mapped_column("img", String(255), nullable=False, unique=True)


class ArticleModel(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pageid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
