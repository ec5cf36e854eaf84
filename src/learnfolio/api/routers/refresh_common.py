"""Shared handling of confirmed batch refreshes."""

from collections.abc import Awaitable, Callable
from typing import Optional

from learnfolio.api.schemas import RefreshResponse
from learnfolio.domain.views import RefreshReport
from learnfolio.services import AutoConfirmPrompter, BatchRefresher, RefreshPrompter

RefreshCall = Callable[[Optional[RefreshPrompter]], Awaitable[Optional[RefreshReport]]]


async def run_refresh(
    start: RefreshCall,
    refresher: BatchRefresher,
    confirm: bool,
) -> RefreshResponse:
    """Run a refresh with the caller's confirmation and describe the outcome."""
    prompter = AutoConfirmPrompter(confirmed=confirm)
    report = await start(prompter)
    if report is None:
        return RefreshResponse(
            state=refresher.state,
            message="Refresh not confirmed; nothing was changed",
        )
    return RefreshResponse(
        state=refresher.state,
        target=report.target,
        success_count=report.success_count,
        fail_count=report.fail_count,
        failures=report.failures,
        cancelled=report.cancelled,
        message=prompter.messages[-1] if prompter.messages else None,
    )
