"""
Repository factory.

Builds the todo/label repository pair for the configured storage backend.
The pair is meant to be created once per process and shared.

Usage:
    repos = get_repositories()
    todo = await repos.todos.create(cmd)
"""

import logging
from typing import NamedTuple, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from todolabels.config import Settings, get_settings
from todolabels.core.constants import StorageBackend
from todolabels.database.session import create_db_engine, create_session_factory
from todolabels.repositories.base import LabelRepository, TodoRepository
from todolabels.repositories.database import DatabaseLabelRepository, DatabaseTodoRepository
from todolabels.repositories.memory import InMemoryLabelRepository, InMemoryTodoRepository

logger = logging.getLogger(__name__)


class Repositories(NamedTuple):
    todos: TodoRepository
    labels: LabelRepository


def get_repositories(
    current: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker] = None,
) -> Repositories:
    """
    Build the repositories for ``current.storage_backend``.

    Args:
        current: Settings to read. Default is the global settings.
        session_factory: Use this instead of building an engine from
            ``current.database_url`` (database backend only).

    Returns:
        The todo and label repositories. In memory, the todo store resolves
        labels against the returned label store.
    """
    current = current or get_settings()
    backend = StorageBackend(current.storage_backend)

    if backend is StorageBackend.MEMORY:
        labels = InMemoryLabelRepository()
        logger.info("Using in-memory repositories")
        return Repositories(todos=InMemoryTodoRepository(labels), labels=labels)

    if session_factory is None:
        engine = create_db_engine(
            current.database_url,
            echo=current.app_debug,
            pool_size=current.db_pool_size,
        )
        session_factory = create_session_factory(engine)

    logger.info("Using database repositories")
    return Repositories(
        todos=DatabaseTodoRepository(session_factory),
        labels=DatabaseLabelRepository(session_factory),
    )
