"""
Validation gate.

Turns an untrusted payload (a decoded mapping, or raw JSON text/bytes) into a
command, or raises one of two errors the caller can tell apart:

- MalformedPayload: the payload is not valid JSON, has the wrong type for a
  field, misses a required field or carries an unknown one.
- ValidationFailed: the shape is right but field constraints are violated.
  Every violation is reported, not only the first.

The gate performs no I/O and never consults a store.

Example:
    cmd = validate_payload(CreateTodo, b'{"text": "buy milk", "labels": [1]}')

    try:
        validate_payload(CreateTodo, {"text": ""})
    except ValidationFailed as exc:
        print(exc.message)  # Validation error: [text: must not be empty]
"""

import logging
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import ValidationError

from todolabels.core.errors import MalformedPayload, ValidationFailed
from todolabels.schemas.commands import Command

logger = logging.getLogger(__name__)

CommandT = TypeVar("CommandT", bound=Command)

# pydantic error types that mean "shape is fine, value breaks a rule"
CONSTRAINT_ERROR_TYPES = frozenset({
    "string_too_short",
    "string_too_long",
    "too_short",
    "too_long",
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "string_pattern_mismatch",
    "value_error",
})


def _describe(error: Dict[str, Any]) -> str:
    """Render one pydantic error as "field: problem"."""
    field = ".".join(str(part) for part in error.get("loc", ())) or "payload"
    ctx = error.get("ctx") or {}
    kind = error["type"]

    if kind == "string_too_short":
        min_length = ctx.get("min_length", 1)
        if min_length <= 1:
            problem = "must not be empty"
        else:
            problem = f"must be at least {min_length} characters"
    elif kind == "string_too_long":
        problem = f"must be at most {ctx.get('max_length')} characters"
    else:
        problem = error["msg"]

    return f"{field}: {problem}"


def _is_constraint_error(error: Dict[str, Any]) -> bool:
    return error["type"] in CONSTRAINT_ERROR_TYPES


def validate_payload(
    command_type: Type[CommandT],
    payload: Union[Dict[str, Any], str, bytes],
) -> CommandT:
    """
    Decode and validate a payload into ``command_type``.

    Args:
        command_type: The command class to build (CreateTodo, UpdateTodo, ...)
        payload: A mapping, or JSON text/bytes

    Returns:
        The validated command

    Raises:
        MalformedPayload: If the payload cannot be parsed into the shape
        ValidationFailed: If the shape parses but constraints are violated
    """
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return command_type.model_validate_json(payload)
        return command_type.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()

    messages: List[str] = [_describe(error) for error in errors]

    if all(_is_constraint_error(error) for error in errors):
        logger.debug(f"{command_type.__name__} rejected: {messages}")
        raise ValidationFailed(messages)

    logger.debug(f"{command_type.__name__} payload malformed: {messages}")
    raise MalformedPayload(messages)
