"""Pydantic schemas for preferences and progress."""
from pydantic import model_validator

from reader.schemas.auth import CamelModel


class PreferencesSchema(CamelModel):
    font_size: int
    theme_color: str


class ProgressInSchema(CamelModel):
    book_id: int
    verse_read: int | None = None
    chapter_completed: int | None = None

    @model_validator(mode="after")
    def _require_position(self):
        if self.verse_read is None and self.chapter_completed is None:
            raise ValueError("verseRead or chapterCompleted is required")
        return self


class ProgressOutSchema(CamelModel):
    book_id: int
    verse_read: int = 0
    chapter_completed: int = 0


class AckSchema(CamelModel):
    status: str = "ok"
