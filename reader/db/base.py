"""SQLAlchemy declarative base and model imports for Alembic."""
from reader.db.session import Base

# Import all models so Alembic can see them
from reader.models.book import Book  # noqa: F401
from reader.models.preferences import Preferences  # noqa: F401
from reader.models.progress import Progress  # noqa: F401
from reader.models.user import User  # noqa: F401

__all__ = ["Base", "User", "Book", "Preferences", "Progress"]
