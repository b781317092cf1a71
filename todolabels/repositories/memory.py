"""
In-memory stores.

Process-local repositories over plain dicts, for tests, development and
deployments that do not need durability. One instance is meant to be shared
by every request handler for the life of the process.

Lock discipline:
- each store owns one ReadWriteLock around its dict
- readers share the lock, a writer holds it alone
- the todo store may take its label store's read lock while holding its
  own lock, never the other way round, so the two cannot deadlock
- nothing is awaited while a lock is held

Ids come from a per-store counter and are never reused, even after deletes.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from todolabels.core.constants import ENTITY_LABEL, ENTITY_TODO
from todolabels.core.errors import DuplicateError, NotFoundError, UnexpectedError
from todolabels.schemas import CreateLabel, CreateTodo, Label, Todo, UpdateTodo

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many readers or one writer.

    Waiting writers block new readers, so a steady stream of reads cannot
    starve a write. Not reentrant.

    Example:
        lock = ReadWriteLock()
        with lock.read():
            ...
        with lock.write():
            ...
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


# ========================================
# Labels
# ========================================

class InMemoryLabelRepository:
    """
    Label store over a dict of id -> Label.

    Name uniqueness is enforced here by a scan under the write lock, the same
    rule the relational store gets from its UNIQUE constraint.
    """

    def __init__(self):
        self._labels: Dict[int, Label] = {}
        self._last_id = 0
        self._lock = ReadWriteLock()

    async def create(self, payload: CreateLabel) -> Label:
        with self._lock.write():
            for label in self._labels.values():
                if label.name == payload.name:
                    logger.info(f"Label name {payload.name!r} already used by label {label.id}")
                    raise DuplicateError(ENTITY_LABEL, label.id)

            self._last_id += 1
            label = Label(id=self._last_id, name=payload.name)
            self._labels[label.id] = label

        logger.info(f"Created label {label.id}")
        return label

    async def find(self, id: int) -> Label:
        with self._lock.read():
            label = self._labels.get(id)
        if label is None:
            raise NotFoundError(ENTITY_LABEL, id)
        return label

    async def all(self) -> List[Label]:
        with self._lock.read():
            return sorted(self._labels.values(), key=lambda label: label.id)

    async def delete(self, id: int) -> None:
        with self._lock.write():
            if self._labels.pop(id, None) is None:
                raise NotFoundError(ENTITY_LABEL, id)
        logger.info(f"Deleted label {id}")

    def get_many(self, ids: Iterable[int]) -> Dict[int, Label]:
        """Labels for the ids that exist; unknown ids are left out."""
        with self._lock.read():
            return {id: self._labels[id] for id in ids if id in self._labels}


# ========================================
# Todos
# ========================================

@dataclass(frozen=True)
class _TodoRecord:
    """A todo as held in the dict: label ids only, names resolved on read."""

    id: int
    text: str
    completed: bool
    label_ids: Tuple[int, ...]


class InMemoryTodoRepository:
    """
    Todo store over a dict of id -> record.

    Records are immutable and replaced whole on update, so a reader never
    sees half of a write. Labels are resolved against ``labels`` on every
    read; ids of labels deleted since are skipped.

    Example:
        labels = InMemoryLabelRepository()
        todos = InMemoryTodoRepository(labels)

        home = await labels.create(CreateLabel(name="home"))
        todo = await todos.create(CreateTodo(text="buy milk", label_ids={home.id}))
    """

    def __init__(self, labels: Optional[InMemoryLabelRepository] = None):
        self.labels = labels if labels is not None else InMemoryLabelRepository()
        self._todos: Dict[int, _TodoRecord] = {}
        self._last_id = 0
        self._lock = ReadWriteLock()

    def _check_label_ids(self, label_ids: Iterable[int]) -> Tuple[int, ...]:
        wanted = tuple(sorted(label_ids))
        missing = sorted(set(wanted) - set(self.labels.get_many(wanted)))
        if missing:
            raise UnexpectedError(f"unknown label id(s): {missing}")
        return wanted

    def _hydrate(self, record: _TodoRecord) -> Todo:
        known = self.labels.get_many(record.label_ids)
        return Todo(
            id=record.id,
            text=record.text,
            completed=record.completed,
            labels=[known[id] for id in record.label_ids if id in known],
        )

    async def create(self, payload: CreateTodo) -> Todo:
        with self._lock.write():
            label_ids = self._check_label_ids(payload.label_ids)
            self._last_id += 1
            record = _TodoRecord(
                id=self._last_id,
                text=payload.text,
                completed=False,
                label_ids=label_ids,
            )
            self._todos[record.id] = record
            todo = self._hydrate(record)

        logger.info(f"Created todo {todo.id} with labels {list(label_ids)}")
        return todo

    async def find(self, id: int) -> Todo:
        with self._lock.read():
            record = self._todos.get(id)
            if record is None:
                raise NotFoundError(ENTITY_TODO, id)
            return self._hydrate(record)

    async def all(self) -> List[Todo]:
        with self._lock.read():
            records = sorted(self._todos.values(), key=lambda record: record.id, reverse=True)
            return [self._hydrate(record) for record in records]

    async def update(self, id: int, payload: UpdateTodo) -> Todo:
        with self._lock.write():
            record = self._todos.get(id)
            if record is None:
                raise NotFoundError(ENTITY_TODO, id)

            changes = {}
            if payload.text is not None:
                changes["text"] = payload.text
            if payload.completed is not None:
                changes["completed"] = payload.completed
            if payload.label_ids is not None:
                changes["label_ids"] = self._check_label_ids(payload.label_ids)

            record = replace(record, **changes)
            self._todos[id] = record
            todo = self._hydrate(record)

        logger.info(f"Updated todo {id} ({', '.join(changes) or 'no changes'})")
        return todo

    async def delete(self, id: int) -> None:
        with self._lock.write():
            if self._todos.pop(id, None) is None:
                raise NotFoundError(ENTITY_TODO, id)
        logger.info(f"Deleted todo {id}")
