"""Shared FastAPI dependencies."""

import uuid
from collections.abc import AsyncGenerator

from fastapi import Header

from boli.redis_client import get_optional_redis


async def get_redis_dep() -> AsyncGenerator[object, None]:
    """Yield the Redis client (or None) as a FastAPI dependency."""
    yield get_optional_redis()


async def get_current_user_id(x_user_id: uuid.UUID = Header(...)) -> uuid.UUID:  # noqa: B008
    """Acting user, as asserted by the upstream auth gateway."""
    return x_user_id


async def get_optional_user_id(x_user_id: uuid.UUID | None = Header(None)) -> uuid.UUID | None:  # noqa: B008
    """Acting user when the caller is signed in, otherwise None."""
    return x_user_id
