"""SQLAlchemy implementation of DocumentStore."""

import logging
import threading
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnfolio.core.exceptions import PersistenceError
from learnfolio.core.timezone import now_eastern
from learnfolio.repositories.sqlalchemy.orm_models import DocumentORM

logger = logging.getLogger(__name__)


class SqlAlchemyDocumentStore:
    """
    SQLAlchemy-backed key-value document store.

    The session is shared by every service of the process, so each call
    holds the store lock while it uses it.
    """

    def __init__(self, db: Session):
        self._db = db
        self._lock = threading.RLock()

    def load(self, key: str) -> Optional[str]:
        """Return the stored document for key, or None."""
        with self._lock:
            try:
                orm_doc = self._db.query(DocumentORM).filter(DocumentORM.key == key).first()
            except SQLAlchemyError:
                # Unreadable storage is treated like a missing document
                logger.warning("Could not read document '%s'", key, exc_info=True)
                return None
            return orm_doc.body if orm_doc else None

    def save(self, key: str, document: str) -> None:
        """Insert or replace the document stored under key."""
        self.save_many({key: document})

    def save_many(self, documents: dict[str, str]) -> None:
        """Upsert every document in a single commit."""
        with self._lock:
            try:
                for key, document in documents.items():
                    self._upsert(key, document)
                self._db.commit()
            except SQLAlchemyError as e:
                self._db.rollback()
                keys = ", ".join(documents)
                logger.error("Failed to save documents '%s': %s", keys, e)
                raise PersistenceError(keys, str(e)) from e

    def _upsert(self, key: str, document: str) -> None:
        orm_doc = self._db.query(DocumentORM).filter(DocumentORM.key == key).first()
        if orm_doc:
            orm_doc.body = document
            orm_doc.updated_at_est = now_eastern()
        else:
            self._db.add(DocumentORM(key=key, body=document, updated_at_est=now_eastern()))
