"""Content repository: read-only access to stored books."""
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reader.core.errors import NotFound, PersistenceError
from reader.core.logging_config import get_logger
from reader.models.book import Book
from reader.schemas.book import BookOutSchema, parse_book_document

logger = get_logger(__name__)


def _to_schema(book: Book) -> BookOutSchema:
    title, chapters = parse_book_document(book.content)
    return BookOutSchema(id=book.id, title=book.title or title or "", chapters=chapters)


async def get_book(db: AsyncSession, book_id: int) -> BookOutSchema:
    try:
        result = await db.execute(select(Book).where(Book.id == book_id))
    except SQLAlchemyError as exc:
        logger.exception("Loading book %s failed", book_id)
        raise PersistenceError() from exc

    book = result.scalar_one_or_none()
    if book is None:
        raise NotFound("Book not found")
    return _to_schema(book)


async def list_books(db: AsyncSession) -> list[BookOutSchema]:
    try:
        result = await db.execute(select(Book).order_by(Book.id.asc()))
    except SQLAlchemyError as exc:
        logger.exception("Listing books failed")
        raise PersistenceError() from exc
    return [_to_schema(book) for book in result.scalars().all()]
