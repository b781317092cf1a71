"""Database package."""

from todolabels.database.session import (
    create_db_engine,
    create_session_factory,
    get_engine,
    get_session_factory,
    transaction,
    create_all_tables,
    drop_all_tables,
)

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "get_engine",
    "get_session_factory",
    "transaction",
    "create_all_tables",
    "drop_all_tables",
]
