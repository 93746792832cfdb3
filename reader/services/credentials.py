"""Credential store: registration, lookup and password authentication."""
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reader.core.errors import DuplicateCredential, InvalidCredentials, InvalidInput, PersistenceError
from reader.core.logging_config import get_logger
from reader.core.security import hash_password, verify_password
from reader.models.user import User

logger = get_logger(__name__)


def _require(**fields: str) -> None:
    for name, value in fields.items():
        if not value or not value.strip():
            raise InvalidInput(f"{name} is required")


async def register(db: AsyncSession, username: str, email: str, password: str) -> int:
    """Create a user and return its id.

    Hashing runs in the threadpool, off the event loop.
    Uniqueness of username and email is left to the database constraints so
    that two concurrent registrations cannot both succeed.
    """
    _require(username=username, email=email, password=password)

    user = User(
        username=username.strip(),
        email=email.strip().lower(),
        password_hash=await run_in_threadpool(hash_password, password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.info("Registration rejected for %r: duplicate username or email", user.username)
        raise DuplicateCredential() from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Registration failed for %r", user.username)
        raise PersistenceError() from exc

    await db.refresh(user)
    logger.info("Registered user %s (%r)", user.id, user.username)
    return user.id


async def find_by_username(db: AsyncSession, username: str) -> User | None:
    try:
        result = await db.execute(select(User).where(User.username == username.strip()))
    except SQLAlchemyError as exc:
        logger.exception("User lookup failed")
        raise PersistenceError() from exc
    return result.scalar_one_or_none()


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    """Return the user for valid credentials; InvalidCredentials otherwise."""
    _require(username=username, password=password)
    user = await find_by_username(db, username)
    if user is None or not await run_in_threadpool(verify_password, password, user.password_hash):
        logger.info("Failed login for %r", username)
        raise InvalidCredentials()
    return user
