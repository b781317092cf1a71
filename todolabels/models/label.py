"""
Label table.

``name`` carries a UNIQUE constraint so the database rejects a duplicate
even if two writers pass the store's own pre-insert check at the same time.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from todolabels.core.constants import LABEL_NAME_MAX_LENGTH
from todolabels.models.base import Base


class LabelRow(Base):
    """
    A label as stored.

    Attributes:
        id: Auto-incrementing primary key, never reused
        name: Unique label name
    """

    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    name: Mapped[str] = mapped_column(
        String(LABEL_NAME_MAX_LENGTH),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique label name"
    )

    __table_args__ = {"sqlite_autoincrement": True, "comment": "Labels attachable to todos"}

    def __repr__(self) -> str:
        return f"<LabelRow(id={self.id}, name='{self.name}')>"
