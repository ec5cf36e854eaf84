"""Repository layer - data access abstractions and implementations."""

from learnfolio.repositories.protocols import DocumentStore

__all__ = [
    "DocumentStore",
]
