"""Pytest configuration and shared fixtures for todolabels tests."""

from __future__ import annotations

import pytest
import pytest_asyncio

from todolabels.database.session import (
    create_all_tables,
    create_db_engine,
    create_session_factory,
)
from todolabels.repositories import (
    DatabaseLabelRepository,
    DatabaseTodoRepository,
    InMemoryLabelRepository,
    InMemoryTodoRepository,
    Repositories,
)


@pytest.fixture
def memory_labels() -> InMemoryLabelRepository:
    """Empty in-memory label store."""
    return InMemoryLabelRepository()


@pytest.fixture
def memory_todos(memory_labels: InMemoryLabelRepository) -> InMemoryTodoRepository:
    """Empty in-memory todo store bound to memory_labels."""
    return InMemoryTodoRepository(memory_labels)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Async engine on a fresh SQLite file with all tables created."""
    engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}", echo=False)
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
def db_labels(session_factory) -> DatabaseLabelRepository:
    return DatabaseLabelRepository(session_factory)


@pytest.fixture
def db_todos(session_factory) -> DatabaseTodoRepository:
    return DatabaseTodoRepository(session_factory)


@pytest_asyncio.fixture(params=["memory", "database"])
async def repos(request, tmp_path):
    """
    A todo/label repository pair for each backend.

    Tests using this fixture run once per backend, so both stores are held
    to the same behaviour.
    """
    if request.param == "memory":
        labels = InMemoryLabelRepository()
        yield Repositories(todos=InMemoryTodoRepository(labels), labels=labels)
        return

    engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}", echo=False)
    await create_all_tables(engine)
    factory = create_session_factory(engine)
    yield Repositories(
        todos=DatabaseTodoRepository(factory),
        labels=DatabaseLabelRepository(factory),
    )
    await engine.dispose()
