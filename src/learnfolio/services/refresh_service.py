"""Batch re-pricing of holdings and watchlist symbols."""

import asyncio
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Optional, Protocol

from learnfolio.core.exceptions import (
    PersistenceError,
    QuoteUnavailableError,
    RefreshInProgressError,
)
from learnfolio.domain.models import QuoteErrorKind, RefreshState, RefreshTarget
from learnfolio.domain.views import RefreshReport
from learnfolio.services.ledger_service import LedgerService
from learnfolio.services.market_data_service import MarketDataService
from learnfolio.services.rate_limiter import FixedDelayRateLimiter, RateLimiter
from learnfolio.services.watchlist_service import WatchlistService

logger = logging.getLogger(__name__)

# (symbol, ids of every holding or watchlist entry carrying it)
RefreshTargets = list[tuple[str, list[str]]]


class RefreshPrompter(Protocol):
    """User interaction needed by a batch refresh."""

    def confirm(self, message: str) -> bool:
        """Ask before starting; False cancels with no side effects."""
        ...

    def notify(self, message: str) -> None:
        """Report the outcome."""
        ...


class AutoConfirmPrompter:
    """Prompter for non-interactive callers: answers with a fixed decision."""

    def __init__(self, confirmed: bool = True):
        self._confirmed = confirmed
        self.messages: list[str] = []

    def confirm(self, message: str) -> bool:
        return self._confirmed

    def notify(self, message: str) -> None:
        self.messages.append(message)
        logger.info(message)


class BatchRefresher:
    """
    Sequentially re-prices every held (or watched) symbol.

    States: IDLE -> CONFIRMING -> RUNNING -> COMPLETED. Declining the
    confirmation returns to IDLE. Symbols are fetched one at a time through
    the rate limiter; a failed symbol keeps its old price and the batch
    carries on. Only one batch (holdings or watchlist) runs at a time.
    Ledger operations may run while the batch waits; a lot sold in the
    meantime is skipped silently.
    """

    def __init__(
        self,
        market_data: MarketDataService,
        ledger: LedgerService,
        watchlist: WatchlistService,
        prompter: Optional[RefreshPrompter] = None,
        limiter_factory: Optional[Callable[[], RateLimiter]] = None,
    ):
        self._market = market_data
        self._ledger = ledger
        self._watchlist = watchlist
        self._prompter = prompter or AutoConfirmPrompter()
        self._limiter_factory = limiter_factory or (lambda: FixedDelayRateLimiter(15.0))
        self._state = RefreshState.IDLE
        self._cancel_requested = False
        self.last_report: Optional[RefreshReport] = None

    @property
    def state(self) -> RefreshState:
        return self._state

    def cancel(self) -> bool:
        """Stop a running batch before its next symbol; False if none is running."""
        if self._state != RefreshState.RUNNING:
            return False
        self._cancel_requested = True
        logger.info("Refresh cancellation requested")
        return True

    async def refresh_holdings(
        self, prompter: Optional[RefreshPrompter] = None
    ) -> Optional[RefreshReport]:
        """Re-price every held symbol. Returns None if the user declined."""
        targets = _group_by_symbol((h.symbol, h.holding_id) for h in self._ledger.holdings)
        return await self._run(
            RefreshTarget.HOLDINGS,
            targets,
            self._ledger.apply_price_update,
            prompter or self._prompter,
        )

    async def refresh_watchlist(
        self, prompter: Optional[RefreshPrompter] = None
    ) -> Optional[RefreshReport]:
        """Re-price every watched symbol. Returns None if the user declined."""
        targets = _group_by_symbol((i.symbol, i.item_id) for i in self._watchlist.items)
        return await self._run(
            RefreshTarget.WATCHLIST,
            targets,
            self._watchlist.apply_price_update,
            prompter or self._prompter,
        )

    async def _run(
        self,
        target: RefreshTarget,
        targets: RefreshTargets,
        apply: Callable[[str, Decimal], bool],
        prompter: RefreshPrompter,
    ) -> Optional[RefreshReport]:
        if self._state in (RefreshState.CONFIRMING, RefreshState.RUNNING):
            raise RefreshInProgressError(self._state.value)

        report = RefreshReport(target=target)
        if not targets:
            self._state = RefreshState.COMPLETED
            self.last_report = report
            prompter.notify(f"Nothing to refresh in {target.value.lower()}")
            return report

        self._state = RefreshState.CONFIRMING
        count = len(targets)
        if not prompter.confirm(
            f"Refresh prices for {count} symbol{'s' if count != 1 else ''}? "
            "Quotes are fetched one at a time to stay within the API limit."
        ):
            self._state = RefreshState.IDLE
            logger.info("%s refresh declined", target.value)
            return None

        self._state = RefreshState.RUNNING
        self._cancel_requested = False
        limiter = self._limiter_factory()
        try:
            for symbol, ids in targets:
                if self._cancel_requested:
                    break
                await limiter.acquire()
                if self._cancel_requested:
                    break
                error_kind = await self._fetch_and_apply(symbol, ids, apply)
                if error_kind is None:
                    report.success_count += 1
                else:
                    report.fail_count += 1
                    report.failures[symbol] = error_kind
            report.cancelled = self._cancel_requested
        finally:
            self._state = RefreshState.COMPLETED
            self._cancel_requested = False
            self.last_report = report

        logger.info(
            "%s refresh finished: %d updated, %d failed%s",
            target.value, report.success_count, report.fail_count,
            " (cancelled)" if report.cancelled else "",
        )
        prompter.notify(_summary(report))
        return report

    async def _fetch_and_apply(
        self,
        symbol: str,
        ids: list[str],
        apply: Callable[[str, Decimal], bool],
    ) -> Optional[QuoteErrorKind]:
        try:
            quote = await asyncio.to_thread(self._market.get_quote, symbol, False)
        except QuoteUnavailableError as e:
            logger.warning("Could not refresh %s: %s", symbol, e.kind.value)
            return e.kind
        except Exception:
            # Any provider failure counts as a failed symbol
            logger.exception("Unexpected error refreshing %s", symbol)
            return QuoteErrorKind.NETWORK_ERROR

        try:
            for item_id in ids:
                apply(item_id, quote.price)
        except PersistenceError as e:
            logger.error("Could not save refreshed price of %s: %s", symbol, e.message)
            return QuoteErrorKind.STORAGE_ERROR
        return None


def _group_by_symbol(pairs) -> RefreshTargets:
    grouped: dict[str, list[str]] = {}
    for symbol, item_id in pairs:
        grouped.setdefault(symbol, []).append(item_id)
    return list(grouped.items())


def _summary(report: RefreshReport) -> str:
    message = f"Updated {report.success_count} prices"
    if report.fail_count:
        message += f", {report.fail_count} failed (" + ", ".join(sorted(report.failures)) + ")"
    if report.cancelled:
        message += ", cancelled"
    return message
