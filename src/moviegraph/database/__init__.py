"""
Database module for moviegraph
"""

from .connection import (
    check_database_connection,
    create_tables,
    dispose_database,
    get_async_engine,
    get_session_factory,
    init_database,
)

__all__ = [
    "check_database_connection",
    "create_tables",
    "dispose_database",
    "get_async_engine",
    "get_session_factory",
    "init_database",
]
