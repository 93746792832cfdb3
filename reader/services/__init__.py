from reader.services.content import get_book, list_books
from reader.services.credentials import authenticate, find_by_username, register
from reader.services.reading import get_preferences, get_progress, upsert_preferences, upsert_progress
from reader.services.seeding import seed_books

__all__ = [
    "authenticate",
    "find_by_username",
    "get_book",
    "get_preferences",
    "get_progress",
    "list_books",
    "register",
    "seed_books",
    "upsert_preferences",
    "upsert_progress",
]
