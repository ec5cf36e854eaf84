"""SQLAlchemy repository implementations."""

from learnfolio.repositories.sqlalchemy.database import (
    Base,
    configure_database,
    get_engine,
    get_session,
    init_db,
    reset_database,
)
from learnfolio.repositories.sqlalchemy.document_store import SqlAlchemyDocumentStore

__all__ = [
    "Base",
    "configure_database",
    "get_engine",
    "get_session",
    "init_db",
    "reset_database",
    "SqlAlchemyDocumentStore",
]
