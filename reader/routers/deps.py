"""Request guards shared by routers."""
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reader.core.errors import MissingToken
from reader.core.security import decode_access_token

# Missing or non-bearer header -> MissingToken (401)
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int:
    """Return the user id from ``Authorization: Bearer <token>``; no database access."""
    if credentials is None or not credentials.credentials:
        raise MissingToken()
    return decode_access_token(credentials.credentials)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
