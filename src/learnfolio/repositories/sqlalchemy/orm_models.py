"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, String, DateTime, Text

from learnfolio.repositories.sqlalchemy.database import Base


class DocumentORM(Base):
    """One persisted document (cash balance, portfolio or watchlist)."""

    __tablename__ = "documents"

    key = Column(String(64), primary_key=True)
    body = Column(Text, nullable=False)
    updated_at_est = Column(DateTime(timezone=True), nullable=True)
