"""Repository protocol definitions (interfaces)."""

from learnfolio.repositories.protocols.document_store import DocumentStore

__all__ = [
    "DocumentStore",
]
