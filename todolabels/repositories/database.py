"""
Relational stores.

Todos and labels live in ``todos`` and ``labels``; their many-to-many link
lives in ``todo_labels``. Todo reads are a single outer-join query whose
rows are folded back into aggregates by fold_todo_rows().

Every operation runs in its own transaction scope taken from the shared
session factory (see database.session.transaction). A multi-statement write
either commits completely or is rolled back, and the caller then gets one
exception. Writes re-read the todo through find() so the returned value is
exactly what a later read will see.

SQLAlchemy errors never escape: they are logged and re-raised as
UnexpectedError, with the original chained.
"""

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todolabels.core.constants import ENTITY_LABEL, ENTITY_TODO
from todolabels.core.errors import DuplicateError, NotFoundError, UnexpectedError
from todolabels.database.session import get_session_factory, transaction
from todolabels.models import LabelRow, TodoLabelRow, TodoRow
from todolabels.repositories.folding import fold_todo_rows
from todolabels.schemas import CreateLabel, CreateTodo, Label, Todo, UpdateTodo

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures inside the block as UnexpectedError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"{action} failed: {exc}")
        raise UnexpectedError(f"{action} failed: {exc}") from exc


def _bulk(statement):
    """Bulk UPDATE/DELETE that leaves the session identity map alone."""
    return statement.execution_options(synchronize_session=False)


def _todo_rows_query() -> Select:
    """
    One row per (todo, label) pair.

    Outer joins keep todos without labels (label columns NULL), and also
    tolerate association rows whose label has gone.
    """
    return (
        select(
            TodoRow.id,
            TodoRow.text,
            TodoRow.completed,
            LabelRow.id.label("label_id"),
            LabelRow.name.label("label_name"),
        )
        .select_from(TodoRow)
        .outerjoin(TodoLabelRow, TodoLabelRow.todo_id == TodoRow.id)
        .outerjoin(LabelRow, LabelRow.id == TodoLabelRow.label_id)
    )


# ========================================
# Labels
# ========================================

class DatabaseLabelRepository:
    """
    Label store on the ``labels`` table.

    Example:
        labels = DatabaseLabelRepository(session_factory)
        home = await labels.create(CreateLabel(name="home"))
        await labels.create(CreateLabel(name="home"))  # DuplicateError(existing_id=home.id)
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory or get_session_factory()

    async def _id_for_name(self, name: str) -> Optional[int]:
        with _database_errors("find label by name"):
            async with transaction(self.session_factory) as session:
                return await session.scalar(select(LabelRow.id).where(LabelRow.name == name))

    async def create(self, payload: CreateLabel) -> Label:
        try:
            with _database_errors("create label"):
                async with transaction(self.session_factory) as session:
                    existing_id = await session.scalar(
                        select(LabelRow.id).where(LabelRow.name == payload.name)
                    )
                    if existing_id is not None:
                        raise DuplicateError(ENTITY_LABEL, existing_id)

                    row = LabelRow(name=payload.name)
                    session.add(row)
                    await session.flush()
                    label = Label(id=row.id, name=row.name)
        except UnexpectedError as exc:
            # A concurrent insert of the same name got past the check above
            if not isinstance(exc.__cause__, IntegrityError):
                raise
            existing_id = await self._id_for_name(payload.name)
            if existing_id is None:
                raise
            logger.info(f"Label name {payload.name!r} already used by label {existing_id}")
            raise DuplicateError(ENTITY_LABEL, existing_id) from exc
        except DuplicateError as exc:
            logger.info(f"Label name {payload.name!r} already used by label {exc.existing_id}")
            raise

        logger.info(f"Created label {label.id}")
        return label

    async def find(self, id: int) -> Label:
        with _database_errors(f"find label {id}"):
            async with transaction(self.session_factory) as session:
                row = await session.get(LabelRow, id)
                if row is None:
                    raise NotFoundError(ENTITY_LABEL, id)
                return Label(id=row.id, name=row.name)

    async def all(self) -> List[Label]:
        with _database_errors("list labels"):
            async with transaction(self.session_factory) as session:
                result = await session.execute(
                    select(LabelRow.id, LabelRow.name).order_by(LabelRow.id.asc())
                )
                return [Label(id=row.id, name=row.name) for row in result]

    async def delete(self, id: int) -> None:
        """Delete the label and detach it from every todo, atomically."""
        with _database_errors(f"delete label {id}"):
            async with transaction(self.session_factory) as session:
                await session.execute(_bulk(delete(TodoLabelRow).where(TodoLabelRow.label_id == id)))
                result = await session.execute(_bulk(delete(LabelRow).where(LabelRow.id == id)))
                if result.rowcount == 0:
                    raise NotFoundError(ENTITY_LABEL, id)

        logger.info(f"Deleted label {id}")


# ========================================
# Todos
# ========================================

class DatabaseTodoRepository:
    """
    Todo store on ``todos`` + ``todo_labels``.

    Example:
        todos = DatabaseTodoRepository(session_factory)
        todo = await todos.create(CreateTodo(text="buy milk", label_ids={1, 2}))
        todo = await todos.update(todo.id, UpdateTodo(completed=True))
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory or get_session_factory()

    @staticmethod
    async def _attach_labels(session: AsyncSession, todo_id: int, label_ids: Iterable[int]) -> None:
        rows = [{"todo_id": todo_id, "label_id": label_id} for label_id in sorted(label_ids)]
        if rows:
            await session.execute(insert(TodoLabelRow), rows)

    async def create(self, payload: CreateTodo) -> Todo:
        with _database_errors("create todo"):
            async with transaction(self.session_factory) as session:
                row = TodoRow(text=payload.text, completed=False)
                session.add(row)
                await session.flush()
                todo_id = row.id
                await self._attach_labels(session, todo_id, payload.label_ids)

        logger.info(f"Created todo {todo_id} with labels {sorted(payload.label_ids)}")
        return await self.find(todo_id)

    async def find(self, id: int) -> Todo:
        with _database_errors(f"find todo {id}"):
            async with transaction(self.session_factory) as session:
                result = await session.execute(
                    _todo_rows_query()
                    .where(TodoRow.id == id)
                    .order_by(TodoLabelRow.id.asc())
                )
                todos = fold_todo_rows(result.all())

        if not todos:
            raise NotFoundError(ENTITY_TODO, id)
        return todos[0]

    async def all(self) -> List[Todo]:
        with _database_errors("list todos"):
            async with transaction(self.session_factory) as session:
                result = await session.execute(
                    _todo_rows_query().order_by(TodoRow.id.desc(), TodoLabelRow.id.asc())
                )
                return fold_todo_rows(result.all())

    async def update(self, id: int, payload: UpdateTodo) -> Todo:
        values = {}
        if payload.text is not None:
            values["text"] = payload.text
        if payload.completed is not None:
            values["completed"] = payload.completed

        with _database_errors(f"update todo {id}"):
            async with transaction(self.session_factory) as session:
                if values:
                    result = await session.execute(
                        _bulk(update(TodoRow).where(TodoRow.id == id).values(**values))
                    )
                    found = result.rowcount > 0
                else:
                    found = await session.scalar(select(TodoRow.id).where(TodoRow.id == id)) is not None
                if not found:
                    raise NotFoundError(ENTITY_TODO, id)

                if payload.label_ids is not None:
                    await session.execute(_bulk(delete(TodoLabelRow).where(TodoLabelRow.todo_id == id)))
                    await self._attach_labels(session, id, payload.label_ids)

        changed = list(values) + (["label_ids"] if payload.label_ids is not None else [])
        logger.info(f"Updated todo {id} ({', '.join(changed) or 'no changes'})")
        return await self.find(id)

    async def delete(self, id: int) -> None:
        with _database_errors(f"delete todo {id}"):
            async with transaction(self.session_factory) as session:
                await session.execute(_bulk(delete(TodoLabelRow).where(TodoLabelRow.todo_id == id)))
                result = await session.execute(_bulk(delete(TodoRow).where(TodoRow.id == id)))
                if result.rowcount == 0:
                    raise NotFoundError(ENTITY_TODO, id)

        logger.info(f"Deleted todo {id}")
