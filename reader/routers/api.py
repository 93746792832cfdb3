"""API routes: JSON for books, preferences and reading progress."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from reader.db.session import get_db
from reader.routers.deps import CurrentUserId
from reader.schemas.book import BookOutSchema
from reader.schemas.reading import AckSchema, PreferencesSchema, ProgressInSchema, ProgressOutSchema
from reader.services import content, reading

router = APIRouter(prefix="/api", tags=["api"])


@router.get("/book/{book_id}", response_model=BookOutSchema)
async def get_book(
    book_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get one book by ID, with chapters and the flat verse list."""
    return await content.get_book(db, book_id)


@router.get("/books", response_model=list[BookOutSchema])
async def list_books(db: Annotated[AsyncSession, Depends(get_db)]):
    return await content.list_books(db)


@router.get("/preferences", response_model=PreferencesSchema)
async def get_preferences(
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await reading.get_preferences(db, user_id)


@router.put("/preferences", response_model=AckSchema)
async def put_preferences(
    body: PreferencesSchema,
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Replace font size and theme for the current user."""
    await reading.upsert_preferences(db, user_id, body.font_size, body.theme_color)
    return AckSchema()


@router.put("/progress", response_model=AckSchema)
async def put_progress(
    body: ProgressInSchema,
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record the furthest verse (or chapter) read. Overwrites; lower values are accepted."""
    await reading.upsert_progress(db, user_id, body.book_id, body.verse_read, body.chapter_completed)
    return AckSchema()


@router.get("/progress/{book_id}", response_model=ProgressOutSchema)
async def get_progress(
    book_id: int,
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await reading.get_progress(db, user_id, book_id)
