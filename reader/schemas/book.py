"""Pydantic schemas for stored book documents and the book API payload.

Stored documents are versioned:

* version 1 (legacy): ``{"verses": [{"chapter", "verse", "text"}, ...]}``
* version 2: ``{"schema_version": 2, "chapters": [{"chapter", "verses": [...]}, ...]}``

``parse_book_document`` accepts either and always returns chapters.
"""
import json
from itertools import groupby
from typing import Literal

from pydantic import BaseModel, ValidationError, computed_field

from reader.core.errors import MalformedContent

CURRENT_SCHEMA_VERSION = 2


class VerseSchema(BaseModel):
    chapter: int
    verse: int
    text: str


class ChapterSchema(BaseModel):
    chapter: int
    verses: list[VerseSchema]


class BookDocumentV1(BaseModel):
    schema_version: Literal[1] = 1
    title: str | None = None
    verses: list[VerseSchema]


class BookDocumentV2(BaseModel):
    schema_version: Literal[2] = CURRENT_SCHEMA_VERSION
    title: str | None = None
    chapters: list[ChapterSchema]


class BookOutSchema(BaseModel):
    id: int
    title: str
    chapters: list[ChapterSchema]

    @computed_field
    @property
    def verses(self) -> list[VerseSchema]:
        """All verses in reading order."""
        return [verse for chapter in self.chapters for verse in chapter.verses]


def _chapters_from_verses(verses: list[VerseSchema]) -> list[ChapterSchema]:
    return [
        ChapterSchema(chapter=number, verses=list(group))
        for number, group in groupby(verses, key=lambda v: v.chapter)
    ]


def parse_book_document(raw: str) -> tuple[str | None, list[ChapterSchema]]:
    """Return (title, chapters) from a stored document; raise MalformedContent if unusable."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedContent("Stored book is not valid JSON") from exc
    if not isinstance(data, dict):
        raise MalformedContent("Stored book must be a JSON object")

    version = data.get("schema_version", 2 if "chapters" in data else 1)
    try:
        if version == 1:
            doc = BookDocumentV1.model_validate(data)
            return doc.title, _chapters_from_verses(doc.verses)
        if version == 2:
            doc = BookDocumentV2.model_validate(data)
            return doc.title, doc.chapters
    except ValidationError as exc:
        raise MalformedContent(f"Stored book does not match schema version {version}") from exc
    raise MalformedContent(f"Unknown book schema version: {version!r}")


def dump_book_document(title: str, chapters: list[ChapterSchema]) -> str:
    """Serialize chapters as a current-version document."""
    doc = BookDocumentV2(title=title, chapters=chapters)
    return doc.model_dump_json()
