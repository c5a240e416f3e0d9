"""Infrastructure module - Database engine, sessions and lifecycle."""

from app.infra.database import Base, close_db, db_manager, get_db, init_db

__all__ = [
    "Base",
    "close_db",
    "db_manager",
    "get_db",
    "init_db",
]
