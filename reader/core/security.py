"""Password hashing (bcrypt) and JWT bearer tokens."""
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from reader.core.config import get_settings
from reader.core.errors import InvalidToken
from reader.core.logging_config import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Sign a bearer token for ``user_id``: {sub, iat, exp}."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": str(user_id), "iat": now, "exp": now + expires_delta, "type": "access"}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> int:
    """Verify signature and expiry and return the user id; raise InvalidToken otherwise."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError as exc:
        logger.debug("Rejected expired token")
        raise InvalidToken("Token expired") from exc
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise InvalidToken() from exc

    if payload.get("type") != "access":
        raise InvalidToken()
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidToken() from exc
