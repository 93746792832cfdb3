"""Pydantic schemas for registration and login."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys (userId, fontSize, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RegisterSchema(CamelModel):
    username: str
    email: str
    password: str


class LoginSchema(CamelModel):
    username: str
    password: str


class AuthOutSchema(CamelModel):
    user_id: int
    token: str
