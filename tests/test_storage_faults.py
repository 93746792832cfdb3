from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from reader.core.errors import PersistenceError
from reader.core.security import create_access_token
from reader.db.session import get_db
from reader.main import app
from reader.services import content, credentials, reading, seeding

pytestmark = pytest.mark.asyncio


def _db_down() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("database is unavailable"))


class UnavailableSession:
    """Stands in for AsyncSession when the database is unreachable: every query and commit fails."""

    def __init__(self, bind):
        self._bind = bind
        self.rollback = AsyncMock()

    def get_bind(self):
        return self._bind

    def add(self, obj):
        pass

    def add_all(self, objs):
        pass

    async def execute(self, *args, **kwargs):
        raise _db_down()

    async def commit(self):
        raise _db_down()

    async def refresh(self, obj):
        pass


@pytest_asyncio.fixture
async def broken_db(engine):
    return UnavailableSession(engine.sync_engine)


async def test_register_storage_fault(broken_db):
    with pytest.raises(PersistenceError):
        await credentials.register(broken_db, "alice", "a@x.com", "pw")
    broken_db.rollback.assert_awaited_once()


async def test_lookup_storage_fault(broken_db):
    with pytest.raises(PersistenceError):
        await credentials.find_by_username(broken_db, "alice")


async def test_preferences_write_storage_fault(broken_db):
    with pytest.raises(PersistenceError):
        await reading.upsert_preferences(broken_db, 1, 20, "dark")
    broken_db.rollback.assert_awaited_once()


async def test_progress_write_storage_fault(broken_db):
    with pytest.raises(PersistenceError):
        await reading.upsert_progress(broken_db, 1, 1, verse_read=5)
    broken_db.rollback.assert_awaited_once()


async def test_reads_storage_fault(broken_db):
    with pytest.raises(PersistenceError):
        await reading.get_progress(broken_db, 1, 1)
    with pytest.raises(PersistenceError):
        await reading.get_preferences(broken_db, 1)
    with pytest.raises(PersistenceError):
        await content.get_book(broken_db, 1)
    with pytest.raises(PersistenceError):
        await content.list_books(broken_db)


async def test_seeding_storage_fault(broken_db):
    with pytest.raises(PersistenceError):
        await seeding.seed_books(broken_db)
    broken_db.rollback.assert_awaited_once()


@pytest.mark.parametrize(
    "method,path,body,auth",
    [
        ("GET", "/api/book/1", None, False),
        ("GET", "/api/books", None, False),
        ("POST", "/api/register", {"username": "alice", "email": "a@x.com", "password": "pw"}, False),
        ("POST", "/api/login", {"username": "alice", "password": "pw"}, False),
        ("PUT", "/api/preferences", {"fontSize": 20, "themeColor": "dark"}, True),
        ("PUT", "/api/progress", {"bookId": 1, "verseRead": 5}, True),
        ("GET", "/api/progress/1", None, True),
    ],
)
async def test_storage_fault_is_500_database_error(client: AsyncClient, broken_db, method, path, body, auth):
    async def get_broken_db():
        yield broken_db

    app.dependency_overrides[get_db] = get_broken_db
    headers = {"Authorization": f"Bearer {create_access_token(1)}"} if auth else {}

    resp = await client.request(method, path, json=body, headers=headers)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Database error"}
