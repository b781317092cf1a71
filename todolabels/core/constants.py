"""
Application-wide constants.

Field limits shared by the validation gate and the database schema,
and the names of the storage backends.
"""

from enum import Enum


# ========================================
# Field Limits
# ========================================

TEXT_MIN_LENGTH = 1
TEXT_MAX_LENGTH = 100

LABEL_NAME_MIN_LENGTH = 1
LABEL_NAME_MAX_LENGTH = 100


# ========================================
# Storage Backends
# ========================================

class StorageBackend(str, Enum):
    """
    Storage backends a repository pair can be built on.

    Usage:
        backend = StorageBackend("database")
        print(backend == "database")  # True
    """

    MEMORY = "memory"
    """Process-local store, discarded when the process exits."""

    DATABASE = "database"
    """Relational store reached through an async SQLAlchemy engine."""


# ========================================
# Entity Names (used in error messages)
# ========================================

ENTITY_TODO = "Todo"
ENTITY_LABEL = "Label"
