"""Seed the books table from the JSON documents bundled under reader/data."""
import json
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reader.core.config import BASE_DIR
from reader.core.errors import PersistenceError
from reader.core.logging_config import get_logger
from reader.models.book import Book
from reader.schemas.book import parse_book_document

logger = get_logger(__name__)

DATA_DIR = BASE_DIR / "data"


def load_book_files(data_dir: Path = DATA_DIR) -> list[dict]:
    """Read every *.json document in ``data_dir``; each needs an id and a title."""
    books = []
    for path in sorted(data_dir.glob("*.json")):
        data = json.loads(path.read_text(encoding="utf-8"))
        content = json.dumps({k: v for k, v in data.items() if k != "id"}, ensure_ascii=False)
        # Fail at startup rather than on first read.
        parse_book_document(content)
        books.append({"id": int(data["id"]), "title": data["title"], "content": content})
    return books


async def _existing_ids(db: AsyncSession, ids: list[int]) -> set[int]:
    result = await db.execute(select(Book.id).where(Book.id.in_(ids)))
    return set(result.scalars().all())


async def seed_books(db: AsyncSession, data_dir: Path = DATA_DIR) -> int:
    """Insert bundled books whose id is not stored yet. Returns how many were added."""
    books = load_book_files(data_dir)
    if not books:
        return 0

    try:
        existing = await _existing_ids(db, [b["id"] for b in books])
        pending = [Book(**book) for book in books if book["id"] not in existing]
        if not pending:
            return 0
        db.add_all(pending)
        await db.commit()
    except IntegrityError:
        # Another worker seeded between our check and insert.
        await db.rollback()
        logger.info("Books already seeded by another process")
        return 0
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Seeding books failed")
        raise PersistenceError() from exc

    logger.info("Seeded %d book(s)", len(pending))
    return len(pending)
