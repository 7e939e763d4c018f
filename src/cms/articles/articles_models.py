"""Article domain dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Article:
    id: int
    title: str
    content: str
    pageid: int
    index: int
