"""Auth routes: register and login. Both answer with a bearer token."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from reader.core.security import create_access_token
from reader.db.session import get_db
from reader.schemas.auth import AuthOutSchema, LoginSchema, RegisterSchema
from reader.services import credentials

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=AuthOutSchema)
async def register(
    body: RegisterSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create the account and log it in."""
    user_id = await credentials.register(db, body.username, body.email, body.password)
    return AuthOutSchema(user_id=user_id, token=create_access_token(user_id))


@router.post("/login", response_model=AuthOutSchema)
async def login(
    body: LoginSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await credentials.authenticate(db, body.username, body.password)
    return AuthOutSchema(user_id=user.id, token=create_access_token(user.id))
