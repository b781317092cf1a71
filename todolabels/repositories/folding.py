"""
Row folding for the relational store.

The todo read query joins todos to their labels and returns one row per
(todo, label) pair; a todo without labels still yields one row whose label
columns are NULL. fold_todo_rows() collapses those rows back into Todo
aggregates.
"""

from typing import Dict, Iterable, List, NamedTuple, Optional

from todolabels.schemas import Label, Todo


class TodoLabelJoinRow(NamedTuple):
    """One row of the todo/label outer join."""

    id: int
    text: str
    completed: bool
    label_id: Optional[int]
    label_name: Optional[str]


def fold_todo_rows(rows: Iterable[TodoLabelJoinRow]) -> List[Todo]:
    """
    Group join rows into todos, keeping the order rows arrive in.

    Todos come out in the order their first row was seen, so the query's
    ORDER BY decides the result order. Labels are appended as they appear and
    are never merged: a repeated label id means the query produced it twice.

    Any object with the TodoLabelJoinRow attributes works as a row, including
    SQLAlchemy Row objects.

    Example:
        fold_todo_rows([
            TodoLabelJoinRow(1, "a", False, 10, "home"),
            TodoLabelJoinRow(1, "a", False, 11, "work"),
            TodoLabelJoinRow(2, "b", True, None, None),
        ])
        # [Todo(id=1, labels=[home, work]), Todo(id=2, labels=[])]
    """
    # dicts keep insertion order, which is the first-seen order we need
    pending: Dict[int, dict] = {}

    for row in rows:
        todo = pending.get(row.id)
        if todo is None:
            todo = {
                "id": row.id,
                "text": row.text,
                "completed": row.completed,
                "labels": [],
            }
            pending[row.id] = todo

        # NULL label columns come from the outer join of an unlabelled todo
        if row.label_id is not None:
            todo["labels"].append(Label(id=row.label_id, name=row.label_name))

    return [Todo(**todo) for todo in pending.values()]
