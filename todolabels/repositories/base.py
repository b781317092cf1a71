"""
Repository contracts.

Every backend implements these two protocols with identical behaviour, so
callers depend on TodoRepository / LabelRepository and never on a concrete
store. All methods are coroutines on every backend.
"""

from typing import List, Protocol

from todolabels.schemas import CreateLabel, CreateTodo, Label, Todo, UpdateTodo


class TodoRepository(Protocol):
    """Todo capability set."""

    async def create(self, payload: CreateTodo) -> Todo:
        """
        Create a todo (not completed) attached to ``payload.label_ids``.

        Returns:
            The todo as read back after the write, labels included.

        Raises:
            UnexpectedError: If a label id does not exist or the write fails.
            Nothing is left behind in that case.
        """
        ...

    async def find(self, id: int) -> Todo:
        """
        Raises:
            NotFoundError: If no todo has this id.
        """
        ...

    async def all(self) -> List[Todo]:
        """Every todo with its labels, most recently created first."""
        ...

    async def update(self, id: int, payload: UpdateTodo) -> Todo:
        """
        Apply the fields set on ``payload``; ``label_ids`` replaces the label set.

        Raises:
            NotFoundError: If no todo has this id.
            UnexpectedError: If a label id does not exist or the write fails.
        """
        ...

    async def delete(self, id: int) -> None:
        """
        Remove the todo and its label associations together.

        Raises:
            NotFoundError: If no todo has this id.
        """
        ...


class LabelRepository(Protocol):
    """Label capability set."""

    async def create(self, payload: CreateLabel) -> Label:
        """
        Raises:
            DuplicateError: If the name is taken; carries the existing id.
        """
        ...

    async def find(self, id: int) -> Label:
        """
        Raises:
            NotFoundError: If no label has this id.
        """
        ...

    async def all(self) -> List[Label]:
        """Every label, ascending by id."""
        ...

    async def delete(self, id: int) -> None:
        """
        Remove the label. Todos it was attached to simply stop showing it.

        Raises:
            NotFoundError: If no label has this id.
        """
        ...
