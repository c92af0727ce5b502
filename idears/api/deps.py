"""
FastAPI dependencies and helpers shared by the route modules.

Key patterns:
1. The database handle and file storage live on app.state and are injected
   per request; nothing is a module-level singleton.
2. Repository calls are wrapped in `storage_errors(...)` so a failing store
   becomes a logged 500 with a safe message instead of escaping the handler.
3. Child resources check their parent idea first via `get_idea_or_404`.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from idears.config import Settings, sanitize_error
from idears.db.models import Idea
from idears.db.session import get_db
from idears.errors import StorageError
from idears.repositories import ideas as ideas_repo
from idears.services.storage import FileStorage

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> FileStorage:
    return request.app.state.storage


# Type aliases for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Storage = Annotated[FileStorage, Depends(get_storage)]


@contextmanager
def storage_errors(action: str, settings: Settings | None = None) -> Iterator[None]:
    """
    Turn a StorageError raised inside the block into a 500 response.

        with storage_errors("Failed to fetch ideas"):
            ideas = await ideas_repo.get_all_ideas(db)

    `action` doubles as the log message and the generic client message.
    """
    try:
        yield
    except StorageError as e:
        logger.error("%s: %s", action, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message=action, settings=settings),
        ) from e


def not_found(resource: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")


async def get_idea_or_404(db: AsyncSession, idea_id: str, settings: Settings) -> Idea:
    """
    Existence check for routes scoped to a parent idea.

    Raises 404 if the idea does not exist, 500 if the lookup itself fails.
    """
    with storage_errors("Failed to fetch idea", settings):
        idea = await ideas_repo.get_idea_by_id(db, idea_id)
    if idea is None:
        raise not_found("Idea")
    return idea
