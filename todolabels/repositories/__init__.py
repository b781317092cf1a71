"""
Data access layer (Repository pattern).

Two interchangeable backends behind one contract:
- InMemoryTodoRepository / InMemoryLabelRepository
- DatabaseTodoRepository / DatabaseLabelRepository
"""

from todolabels.repositories.base import LabelRepository, TodoRepository
from todolabels.repositories.folding import TodoLabelJoinRow, fold_todo_rows
from todolabels.repositories.memory import (
    InMemoryLabelRepository,
    InMemoryTodoRepository,
    ReadWriteLock,
)
from todolabels.repositories.database import DatabaseLabelRepository, DatabaseTodoRepository
from todolabels.repositories.factory import Repositories, get_repositories

__all__ = [
    "TodoRepository",
    "LabelRepository",
    "TodoLabelJoinRow",
    "fold_todo_rows",
    "ReadWriteLock",
    "InMemoryTodoRepository",
    "InMemoryLabelRepository",
    "DatabaseTodoRepository",
    "DatabaseLabelRepository",
    "Repositories",
    "get_repositories",
]
