"""
Schemas package.

Pydantic models for the aggregates stores return, the commands they
accept, and the validation gate that builds commands from raw input.
"""

from todolabels.schemas.entities import Label, Todo
from todolabels.schemas.commands import Command, CreateLabel, CreateTodo, UpdateTodo
from todolabels.schemas.validation import validate_payload

__all__ = [
    "Label",
    "Todo",
    "Command",
    "CreateTodo",
    "UpdateTodo",
    "CreateLabel",
    "validate_payload",
]
