"""Database models and utilities for content storage."""

from .db_ids import MAX_ROW_ID, MIN_ROW_ID, coerce_row_id, fits_int_column
from .db_models import ArticleModel, Base, SlideModel

__all__ = [
    "ArticleModel",
    "Base",
    "MAX_ROW_ID",
    "MIN_ROW_ID",
    "SlideModel",
    "coerce_row_id",
    "fits_int_column",
]
