"""Exceptions shared by the data access layer, file storage and routes."""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

P = ParamSpec("P")
T = TypeVar("T")


class StorageError(Exception):
    """The database or the upload directory failed to complete an operation."""


class UploadTooLargeError(Exception):
    """An uploaded payload exceeded the configured size cap."""

    def __init__(self, limit: int):
        super().__init__(f"Upload exceeds maximum size of {limit} bytes")
        self.limit = limit


def storage_operation(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """
    Wrap a repository coroutine so database failures surface as StorageError.

    The wrapped function takes the AsyncSession as `session` (positional or keyword);
    the session is rolled back before the error is re-raised so it stays usable.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            session = args[0] if args else kwargs.get("session")
            if isinstance(session, AsyncSession):
                await session.rollback()
            raise StorageError(f"{func.__name__} failed: {e}") from e

    return wrapper
