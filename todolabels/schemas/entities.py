"""
Aggregates returned by every repository.

Both are frozen: a caller holding a Todo cannot mutate what another caller
reads from the in-memory store.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Label(BaseModel):
    """
    A label that can be attached to any number of todos.

    Attributes:
        id: Store-assigned identifier
        name: Unique label name (1-100 chars)
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


class Todo(BaseModel):
    """
    A todo together with its materialized labels (the aggregate).

    ``labels`` is not stored on the todo itself; every store rebuilds it from
    the todo's label associations at read time.

    Example:
        todo = Todo(id=1, text="buy milk", labels=[Label(id=2, name="home")])
        todo.to_dict()
        # {"id": 1, "text": "buy milk", "completed": False,
        #  "labels": [{"id": 2, "name": "home"}]}
    """

    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    completed: bool = False
    labels: List[Label] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "labels": [label.to_dict() for label in self.labels],
        }
