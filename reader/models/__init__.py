from reader.models.user import User
from reader.models.book import Book
from reader.models.preferences import Preferences
from reader.models.progress import Progress

__all__ = ["User", "Book", "Preferences", "Progress"]
