"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from todolabels.models.base import Base
from todolabels.models.todo import TodoRow
from todolabels.models.label import LabelRow
from todolabels.models.todo_label import TodoLabelRow

__all__ = [
    "Base",
    "TodoRow",
    "LabelRow",
    "TodoLabelRow",
]
