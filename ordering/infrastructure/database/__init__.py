"""Database engine and session lifecycle."""

from .lifecycle import (
    close_database,
    create_session_factory,
    get_session_factory,
    init_database,
)

__all__ = [
    "close_database",
    "create_session_factory",
    "get_session_factory",
    "init_database",
]
