"""Pydantic schemas for batch refresh endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from learnfolio.domain.models import QuoteErrorKind, RefreshState, RefreshTarget


class RefreshRequest(BaseModel):
    """Batch refreshes are slow, so callers must confirm explicitly."""

    confirm: bool = Field(False, description="Set to true to start the refresh")


class RefreshResponse(BaseModel):
    state: RefreshState
    target: Optional[RefreshTarget] = None
    success_count: int = 0
    fail_count: int = 0
    failures: dict[str, QuoteErrorKind] = Field(default_factory=dict)
    cancelled: bool = False
    message: Optional[str] = None
