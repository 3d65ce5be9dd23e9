"""
Database module.
Contains database connection, models, and repository implementations.
"""

from workqueue.db.connection import (
    close_db,
    create_schema,
    get_async_session,
    get_engine,
    init_db,
)
from workqueue.db.models import Base, QueueRecord

__all__ = [
    "get_async_session",
    "get_engine",
    "create_schema",
    "init_db",
    "close_db",
    "QueueRecord",
    "Base",
]
