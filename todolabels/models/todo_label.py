"""
Association table between todos and labels.

Rows belong to the todo: the todo store rewrites them wholesale on update
and removes them before removing the todo. The surrogate ``id`` keeps the
order in which labels were attached, which is the order a todo's labels are
read back in.
"""

from sqlalchemy import ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from todolabels.models.base import Base


class TodoLabelRow(Base):
    """
    Link between one todo and one label.

    Attributes:
        id: Surrogate key, preserves attach order
        todo_id: The owning todo
        label_id: The attached label
    """

    __tablename__ = "todo_labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    todo_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("todos.id"),
        nullable=False,
    )

    label_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("labels.id"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("todo_id", "label_id", name="uq_todo_labels_todo_label"),
        Index("ix_todo_labels_todo_id", "todo_id"),
        Index("ix_todo_labels_label_id", "label_id"),
    )

    def __repr__(self) -> str:
        return f"<TodoLabelRow(todo_id={self.todo_id}, label_id={self.label_id})>"
