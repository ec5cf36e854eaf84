"""Engine and session management for the document database."""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from learnfolio.config.settings import get_settings

Base = declarative_base()

# Process-wide database state, replaced by configure_database()
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def configure_database(database_url: str) -> Engine:
    """Point the process at database_url, disposing any previous engine."""
    global _engine, _session_factory

    reset_database()
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    _engine = create_engine(database_url, connect_args=connect_args)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine() -> Engine:
    """Return the engine, configuring it from settings on first use."""
    if _engine is None:
        return configure_database(get_settings().get_database_url())
    return _engine


def get_session() -> Session:
    """Open a new session on the configured database."""
    get_engine()
    return _session_factory()


def init_db(db_path: Optional[Path] = None) -> Engine:
    """
    Create the tables and return the engine.

    With db_path, the process is first switched to that SQLite file.
    """
    from learnfolio.repositories.sqlalchemy import orm_models  # noqa: F401

    engine = configure_database(f"sqlite:///{db_path}") if db_path else get_engine()
    Base.metadata.create_all(bind=engine)
    return engine


def reset_database() -> None:
    """Dispose the engine; the next access reconfigures from settings."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
