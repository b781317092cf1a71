"""
Commands accepted by the repositories.

Commands are the only way input reaches a store. They are built by the
validation gate (see validation.py), which enforces the constraints declared
here. Unknown keys are rejected so a typo cannot silently turn into a no-op
update.

``label_ids`` also accepts ``labels`` as its key, the name the web frontend
sends.
"""

from typing import Optional, Set

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from todolabels.core.constants import (
    LABEL_NAME_MAX_LENGTH,
    LABEL_NAME_MIN_LENGTH,
    TEXT_MAX_LENGTH,
    TEXT_MIN_LENGTH,
)


class Command(BaseModel):
    """Base class for all commands."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class CreateTodo(Command):
    """
    Create a todo, optionally attached to existing labels.

    Attributes:
        text: Todo text (1-100 chars)
        label_ids: Ids of the labels to attach (duplicates collapse)
    """

    text: str = Field(min_length=TEXT_MIN_LENGTH, max_length=TEXT_MAX_LENGTH)
    label_ids: Set[int] = Field(
        default_factory=set,
        validation_alias=AliasChoices("label_ids", "labels"),
    )


class UpdateTodo(Command):
    """
    Partial update of a todo.

    A field left as None is not touched. ``label_ids``, when given, replaces
    the whole label set; an empty set detaches every label.
    """

    text: Optional[str] = Field(
        default=None, min_length=TEXT_MIN_LENGTH, max_length=TEXT_MAX_LENGTH
    )
    completed: Optional[bool] = None
    label_ids: Optional[Set[int]] = Field(
        default=None,
        validation_alias=AliasChoices("label_ids", "labels"),
    )


class CreateLabel(Command):
    """Create a label. Name uniqueness is checked by the store, not here."""

    name: str = Field(
        min_length=LABEL_NAME_MIN_LENGTH, max_length=LABEL_NAME_MAX_LENGTH
    )
