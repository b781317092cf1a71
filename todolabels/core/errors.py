"""
Error taxonomy.

Two families of errors:

- ValidationGateError: raised at the input boundary before anything
  reaches a repository. MalformedPayload means the payload could not be
  decoded into the command shape at all; ValidationFailed means it decoded
  but broke one or more field constraints.
- RepositoryError: raised by the stores. NotFoundError and DuplicateError
  are recoverable business outcomes; UnexpectedError wraps any lower-level
  failure after the store has rolled back its own work.

http_status_for() is the single mapping from this taxonomy to transport
status codes.
"""

from typing import List, Optional


class TodoLabelsError(Exception):
    """Root of every error raised by this package."""


# ========================================
# Validation Gate
# ========================================

class ValidationGateError(TodoLabelsError):
    """
    Input was rejected by the validation gate.

    Attributes:
        messages: One human-readable entry per problem found
        message: All entries joined into a single line
    """

    prefix = "Invalid payload"

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        self.message = f"{self.prefix}: [{', '.join(self.messages)}]"
        super().__init__(self.message)


class MalformedPayload(ValidationGateError):
    """The payload could not be parsed into the expected command shape."""

    prefix = "Json parse error"


class ValidationFailed(ValidationGateError):
    """The payload parsed, but violates one or more field constraints."""

    prefix = "Validation error"


# ========================================
# Repository
# ========================================

class RepositoryError(TodoLabelsError):
    """Base class for failures reported by a repository."""


class NotFoundError(RepositoryError):
    """The target entity does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.id = entity_id
        super().__init__(f"{entity} not found, id is {entity_id}")


class DuplicateError(RepositoryError):
    """A uniqueness constraint was violated; carries the existing row's id."""

    def __init__(self, entity: str, existing_id: int):
        self.entity = entity
        self.existing_id = existing_id
        super().__init__(f"{entity} already exists, id is {existing_id}")


class UnexpectedError(RepositoryError):
    """A lower-level failure the store could not classify."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unexpected error: {detail}")


# ========================================
# Transport Mapping
# ========================================

def http_status_for(exc: Optional[BaseException]) -> int:
    """
    Map an exception to the status code a transport layer should answer with.

    Returns:
        400 for gate rejections, 404 for NotFoundError, 409 for
        DuplicateError, 500 for anything else. ``None`` means success (200).

    Example:
        try:
            todo = await todos.find(todo_id)
        except TodoLabelsError as exc:
            return http_status_for(exc), str(exc)
    """
    if exc is None:
        return 200
    if isinstance(exc, ValidationGateError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, DuplicateError):
        return 409
    return 500
