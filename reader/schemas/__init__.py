from reader.schemas.auth import AuthOutSchema, LoginSchema, RegisterSchema
from reader.schemas.book import BookOutSchema, ChapterSchema, VerseSchema
from reader.schemas.reading import AckSchema, PreferencesSchema, ProgressInSchema, ProgressOutSchema

__all__ = [
    "AckSchema",
    "AuthOutSchema",
    "BookOutSchema",
    "ChapterSchema",
    "LoginSchema",
    "PreferencesSchema",
    "ProgressInSchema",
    "ProgressOutSchema",
    "RegisterSchema",
    "VerseSchema",
]
