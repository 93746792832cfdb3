"""Per-user preferences and reading progress.

Both writes are a single ``INSERT ... ON CONFLICT DO UPDATE`` so concurrent
writers to the same key resolve in the database (last write wins) and the row
is always replaced wholesale, never merged.
"""
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reader.core.errors import PersistenceError
from reader.core.logging_config import get_logger
from reader.models.preferences import DEFAULT_FONT_SIZE, DEFAULT_THEME_COLOR, Preferences
from reader.models.progress import Progress
from reader.schemas.reading import PreferencesSchema, ProgressOutSchema

logger = get_logger(__name__)

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _upsert_insert(db: AsyncSession, model):
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise PersistenceError(f"Upsert not supported on {dialect}") from None


async def _execute_write(db: AsyncSession, stmt, what: str) -> None:
    try:
        await db.execute(stmt)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Writing %s failed", what)
        raise PersistenceError() from exc


async def upsert_preferences(db: AsyncSession, user_id: int, font_size: int, theme_color: str) -> None:
    stmt = _upsert_insert(db, Preferences).values(
        user_id=user_id,
        font_size=font_size,
        theme_color=theme_color,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Preferences.user_id],
        set_={
            "font_size": stmt.excluded.font_size,
            "theme_color": stmt.excluded.theme_color,
            "updated_at": func.now(),
        },
    )
    await _execute_write(db, stmt, f"preferences for user {user_id}")
    logger.debug("Saved preferences for user %s", user_id)


async def get_preferences(db: AsyncSession, user_id: int) -> PreferencesSchema:
    try:
        result = await db.execute(
            select(Preferences)
            .where(Preferences.user_id == user_id)
            .execution_options(populate_existing=True)
        )
    except SQLAlchemyError as exc:
        logger.exception("Loading preferences for user %s failed", user_id)
        raise PersistenceError() from exc

    prefs = result.scalar_one_or_none()
    if prefs is None:
        return PreferencesSchema(font_size=DEFAULT_FONT_SIZE, theme_color=DEFAULT_THEME_COLOR)
    return PreferencesSchema.model_validate(prefs)


async def upsert_progress(
    db: AsyncSession,
    user_id: int,
    book_id: int,
    verse_read: int | None = None,
    chapter_completed: int | None = None,
) -> None:
    """Replace the (user, book) progress row; omitted positions are stored as 0."""
    stmt = _upsert_insert(db, Progress).values(
        user_id=user_id,
        book_id=book_id,
        verse_read=verse_read or 0,
        chapter_completed=chapter_completed or 0,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Progress.user_id, Progress.book_id],
        set_={
            "verse_read": stmt.excluded.verse_read,
            "chapter_completed": stmt.excluded.chapter_completed,
            "updated_at": func.now(),
        },
    )
    await _execute_write(db, stmt, f"progress for user {user_id}, book {book_id}")
    logger.debug("Saved progress for user %s, book %s", user_id, book_id)


async def get_progress(db: AsyncSession, user_id: int, book_id: int) -> ProgressOutSchema:
    """Return stored progress, or zeros when the user has not read this book yet."""
    try:
        result = await db.execute(
            select(Progress)
            .where(Progress.user_id == user_id, Progress.book_id == book_id)
            .execution_options(populate_existing=True)
        )
    except SQLAlchemyError as exc:
        logger.exception("Loading progress for user %s, book %s failed", user_id, book_id)
        raise PersistenceError() from exc

    progress = result.scalar_one_or_none()
    if progress is None:
        return ProgressOutSchema(book_id=book_id)
    return ProgressOutSchema.model_validate(progress)
