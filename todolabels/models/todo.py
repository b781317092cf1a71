"""
Todo table.

Holds the todo's own columns only. Its labels live in ``todo_labels`` and
are joined in at read time.
"""

from sqlalchemy import Boolean, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from todolabels.core.constants import TEXT_MAX_LENGTH
from todolabels.models.base import Base


class TodoRow(Base):
    """
    A todo as stored.

    Attributes:
        id: Auto-incrementing primary key, never reused
        text: Todo text (1-100 chars, checked by the validation gate)
        completed: Whether the todo is done
    """

    __tablename__ = "todos"

    # ========================================
    # Primary Key
    # ========================================

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    # ========================================
    # Todo Fields
    # ========================================

    text: Mapped[str] = mapped_column(
        String(TEXT_MAX_LENGTH),
        nullable=False,
        comment="Todo text"
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Whether the todo is done"
    )

    # SQLite only: keep ids monotonic after deletes
    __table_args__ = {"sqlite_autoincrement": True, "comment": "Todo items"}

    def __repr__(self) -> str:
        return f"<TodoRow(id={self.id}, text='{self.text}', completed={self.completed})>"
