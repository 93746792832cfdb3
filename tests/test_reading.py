import pytest
import pytest_asyncio

from reader.services import credentials, reading

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def user_id(db):
    return await credentials.register(db, "alice", "a@x.com", "pw")


async def test_preferences_default_when_unset(db, user_id):
    prefs = await reading.get_preferences(db, user_id)
    assert prefs.font_size == 16
    assert prefs.theme_color == "light"


async def test_upsert_preferences_is_idempotent(db, user_id):
    await reading.upsert_preferences(db, user_id, 20, "dark")
    once = await reading.get_preferences(db, user_id)

    await reading.upsert_preferences(db, user_id, 20, "dark")
    twice = await reading.get_preferences(db, user_id)

    assert once == twice
    assert twice.font_size == 20
    assert twice.theme_color == "dark"


async def test_upsert_preferences_replaces_row(db, user_id):
    await reading.upsert_preferences(db, user_id, 20, "dark")
    await reading.upsert_preferences(db, user_id, 14, "light")

    prefs = await reading.get_preferences(db, user_id)
    assert (prefs.font_size, prefs.theme_color) == (14, "light")


async def test_progress_defaults_to_zero(db, user_id):
    progress = await reading.get_progress(db, user_id, 1)
    assert progress.book_id == 1
    assert progress.verse_read == 0
    assert progress.chapter_completed == 0


async def test_progress_returns_last_write(db, user_id):
    for verse in (1, 2, 5):
        await reading.upsert_progress(db, user_id, 1, verse_read=verse)

    progress = await reading.get_progress(db, user_id, 1)
    assert progress.verse_read == 5


async def test_progress_can_go_backwards(db, user_id):
    await reading.upsert_progress(db, user_id, 1, verse_read=7)
    await reading.upsert_progress(db, user_id, 1, verse_read=3)

    assert (await reading.get_progress(db, user_id, 1)).verse_read == 3


async def test_progress_write_replaces_whole_row(db, user_id):
    await reading.upsert_progress(db, user_id, 1, verse_read=4, chapter_completed=1)
    await reading.upsert_progress(db, user_id, 1, verse_read=6)

    progress = await reading.get_progress(db, user_id, 1)
    assert progress.verse_read == 6
    assert progress.chapter_completed == 0


async def test_progress_is_per_user_and_book(db, user_id):
    bob_id = await credentials.register(db, "bob", "b@x.com", "pw")

    await reading.upsert_progress(db, user_id, 1, verse_read=5)
    await reading.upsert_progress(db, user_id, 2, verse_read=9)
    await reading.upsert_progress(db, bob_id, 1, verse_read=2)

    assert (await reading.get_progress(db, user_id, 1)).verse_read == 5
    assert (await reading.get_progress(db, user_id, 2)).verse_read == 9
    assert (await reading.get_progress(db, bob_id, 1)).verse_read == 2
    assert (await reading.get_progress(db, bob_id, 2)).verse_read == 0
