"""Document store protocol."""

from typing import Protocol, Optional


class DocumentStore(Protocol):
    """Interface for key-value document persistence."""

    def load(self, key: str) -> Optional[str]:
        """Return the stored document for key, or None if nothing was saved."""
        ...

    def save(self, key: str, document: str) -> None:
        """Insert or replace the document stored under key."""
        ...

    def save_many(self, documents: dict[str, str]) -> None:
        """Insert or replace several documents; either all are written or none."""
        ...
