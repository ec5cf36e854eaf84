"""
Unit tests for BatchRefresher.

Tests cover:
- Confirmation, decline and empty target lists
- Partial failures (failed symbols keep their old price, failed saves included)
- One quote per unique symbol, applied to every lot of it
- Rate limiter pacing
- Ledger changes while a batch is in flight
- Single active batch and cancellation
"""

import asyncio
from decimal import Decimal

import pytest

from learnfolio.core.exceptions import RefreshInProgressError
from learnfolio.domain.models import QuoteErrorKind, RefreshState, RefreshTarget
from learnfolio.services import (
    AutoConfirmPrompter,
    BatchRefresher,
    FixedDelayRateLimiter,
    LedgerSeed,
    LedgerService,
)


def run(coro):
    return asyncio.run(coro)


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class HookLimiter:
    """Limiter that runs a callback before the Nth acquisition."""

    def __init__(self, on_call: int, hook):
        self._calls = 0
        self._on_call = on_call
        self._hook = hook

    async def acquire(self) -> None:
        self._calls += 1
        if self._calls == self._on_call:
            result = self._hook()
            if asyncio.iscoroutine(result):
                await result


def make_refresher(market_data_service, ledger_service, watchlist_service, limiter) -> BatchRefresher:
    return BatchRefresher(
        market_data=market_data_service,
        ledger=ledger_service,
        watchlist=watchlist_service,
        limiter_factory=lambda: limiter,
    )


# =============================================================================
# CONFIRMATION TESTS
# =============================================================================


class TestConfirmation:
    """Tests for the confirm step."""

    def test_declined_refresh_changes_nothing(self, refresher, ledger_service, quote_provider):
        """
        GIVEN a held lot
        WHEN the user declines the refresh
        THEN no quote is fetched, prices are unchanged and the state returns to IDLE
        """
        holding_id = ledger_service.buy("AAPL", 1, 100)
        prompter = AutoConfirmPrompter(confirmed=False)

        report = run(refresher.refresh_holdings(prompter))

        assert report is None
        assert refresher.state == RefreshState.IDLE
        assert quote_provider.calls == []
        assert ledger_service.get_holding(holding_id).current_price == Decimal("100")
        assert prompter.messages == []

    def test_empty_portfolio_completes_with_zero_counts(self, refresher, quote_provider):
        """
        GIVEN no holdings
        WHEN a refresh is requested
        THEN it completes immediately without asking or fetching
        """
        prompter = AutoConfirmPrompter(confirmed=False)

        report = run(refresher.refresh_holdings(prompter))

        assert report.success_count == 0
        assert report.fail_count == 0
        assert refresher.state == RefreshState.COMPLETED
        assert quote_provider.calls == []
        assert prompter.messages == ["Nothing to refresh in holdings"]


# =============================================================================
# HOLDINGS REFRESH TESTS
# =============================================================================


class TestRefreshHoldings:
    """Tests for re-pricing held lots."""

    def test_partial_failure_keeps_old_price(self, refresher, ledger_service, quote_provider):
        """
        GIVEN lots in AAPL, MSFT and GOOGL where MSFT is unknown to the quote source
        WHEN the holdings are refreshed
        THEN 2 succeed, 1 fails and MSFT keeps its previous price
        """
        quote_provider.failures["MSFT"] = QuoteErrorKind.NOT_FOUND
        aapl = ledger_service.buy("AAPL", 1, 100)
        msft = ledger_service.buy("MSFT", 1, 300)
        googl = ledger_service.buy("GOOGL", 1, 120)
        prompter = AutoConfirmPrompter()

        report = run(refresher.refresh_holdings(prompter))

        assert report.target == RefreshTarget.HOLDINGS
        assert report.success_count == 2
        assert report.fail_count == 1
        assert report.failures == {"MSFT": QuoteErrorKind.NOT_FOUND}
        assert ledger_service.get_holding(aapl).current_price == Decimal("190.00")
        assert ledger_service.get_holding(msft).current_price == Decimal("300")
        assert ledger_service.get_holding(googl).current_price == Decimal("140.00")
        assert refresher.state == RefreshState.COMPLETED
        assert prompter.messages == ["Updated 2 prices, 1 failed (MSFT)"]

    def test_refresh_never_touches_cash(self, refresher, ledger_service):
        ledger_service.buy("AAPL", 2, 100)
        cash_before = ledger_service.cash

        run(refresher.refresh_holdings())

        assert ledger_service.cash == cash_before

    def test_one_fetch_per_symbol_updates_every_lot(self, refresher, ledger_service, quote_provider):
        """
        GIVEN two AAPL lots
        WHEN the holdings are refreshed
        THEN AAPL is fetched once and both lots get the new price
        """
        first = ledger_service.buy("AAPL", 1, 100)
        second = ledger_service.buy("AAPL", 2, 110)

        report = run(refresher.refresh_holdings())

        assert quote_provider.calls == ["AAPL"]
        assert report.success_count == 1
        assert ledger_service.get_holding(first).current_price == Decimal("190.00")
        assert ledger_service.get_holding(second).current_price == Decimal("190.00")

    def test_refresh_bypasses_quote_cache(self, refresher, ledger_service, market_data_service, quote_provider):
        ledger_service.buy("AAPL", 1, 100)
        market_data_service.get_quote("AAPL")
        quote_provider.prices["AAPL"] = Decimal("200.00")

        run(refresher.refresh_holdings())

        assert ledger_service.holdings[0].current_price == Decimal("200.00")

    def test_unexpected_provider_error_counts_as_network_failure(
        self, refresher, ledger_service, quote_provider
    ):
        ledger_service.buy("AAPL", 1, 100)
        ledger_service.buy("KO", 1, 50)

        def broken(symbol):
            raise RuntimeError("boom")

        quote_provider.get_quote = broken

        report = run(refresher.refresh_holdings())

        assert report.fail_count == 2
        assert set(report.failures.values()) == {QuoteErrorKind.NETWORK_ERROR}

    def test_failed_save_counts_as_failure_and_batch_continues(
        self, market_data_service, watchlist_service, memory_store
    ):
        """
        GIVEN two held symbols and a store that rejects the next save
        WHEN the holdings are refreshed
        THEN the first symbol fails with STORAGE_ERROR and the second is updated
        """
        ledger = LedgerService(store=memory_store, seed=LedgerSeed(cash=Decimal("1000"), symbol=None))
        aapl = ledger.buy("AAPL", 1, 100)
        ko = ledger.buy("KO", 1, 50)
        memory_store.failing_saves = 1
        refresher = make_refresher(
            market_data_service, ledger, watchlist_service, FixedDelayRateLimiter(0)
        )

        report = run(refresher.refresh_holdings())

        assert report.failures == {"AAPL": QuoteErrorKind.STORAGE_ERROR}
        assert report.success_count == 1
        assert ledger.get_holding(aapl).current_price == Decimal("100")
        assert ledger.get_holding(ko).current_price == Decimal("60.00")
        assert refresher.state == RefreshState.COMPLETED


# =============================================================================
# PACING TESTS
# =============================================================================


class TestPacing:
    """Tests for rate limiter usage."""

    def test_fixed_delay_between_symbols(
        self, market_data_service, ledger_service, watchlist_service
    ):
        """
        GIVEN three held symbols and a 15 second fixed delay
        WHEN the holdings are refreshed
        THEN the refresher waits 15 seconds twice (not before the first call)
        """
        sleep = RecordingSleep()
        refresher = make_refresher(
            market_data_service, ledger_service, watchlist_service,
            FixedDelayRateLimiter(15.0, sleep=sleep),
        )
        for symbol in ("AAPL", "MSFT", "KO"):
            ledger_service.buy(symbol, 1, 10)

        run(refresher.refresh_holdings())

        assert sleep.delays == [15.0, 15.0]


# =============================================================================
# CONCURRENCY TESTS
# =============================================================================


class TestConcurrentChanges:
    """Tests for ledger operations and requests while a batch runs."""

    def test_lot_sold_mid_batch_is_skipped(
        self, market_data_service, ledger_service, watchlist_service
    ):
        """
        GIVEN lots in AAPL and MSFT
        WHEN the MSFT lot is sold while the batch waits before fetching it
        THEN the batch finishes, the sale stands and no lot is resurrected
        """
        ledger_service.buy("AAPL", 1, 100)
        msft = ledger_service.buy("MSFT", 1, 300)
        refresher = make_refresher(
            market_data_service, ledger_service, watchlist_service,
            HookLimiter(2, lambda: ledger_service.sell(msft)),
        )

        report = run(refresher.refresh_holdings())

        assert report.fail_count == 0
        assert [h.symbol for h in ledger_service.holdings] == ["AAPL"]
        assert ledger_service.cash == Decimal("9900")

    def test_second_batch_while_running_is_rejected(
        self, market_data_service, ledger_service, watchlist_service
    ):
        """
        GIVEN a holdings refresh waiting on the rate limiter
        WHEN a watchlist refresh is requested
        THEN RefreshInProgressError is raised and the first batch completes
        """
        ledger_service.buy("AAPL", 1, 100)
        watchlist_service.add("KO", 55)
        gate = asyncio.Event()
        errors = []

        async def try_second_batch():
            try:
                await refresher.refresh_watchlist()
            except RefreshInProgressError as e:
                errors.append(e)
            gate.set()

        async def wait_for_gate():
            asyncio.get_running_loop().create_task(try_second_batch())
            await gate.wait()

        refresher = make_refresher(
            market_data_service, ledger_service, watchlist_service,
            HookLimiter(1, wait_for_gate),
        )

        report = run(refresher.refresh_holdings())

        assert len(errors) == 1
        assert errors[0].code == "REFRESH_IN_PROGRESS"
        assert report.success_count == 1
        assert watchlist_service.items[0].current_price == Decimal("55")

    def test_cancel_stops_before_next_symbol(
        self, market_data_service, ledger_service, watchlist_service, quote_provider
    ):
        """
        GIVEN three held symbols
        WHEN the batch is cancelled before the second fetch
        THEN only the first symbol is updated and the report is marked cancelled
        """
        for symbol in ("AAPL", "MSFT", "KO"):
            ledger_service.buy(symbol, 1, 10)
        refresher = make_refresher(
            market_data_service, ledger_service, watchlist_service,
            HookLimiter(2, lambda: refresher.cancel()),
        )

        report = run(refresher.refresh_holdings())

        assert report.cancelled is True
        assert report.success_count == 1
        assert quote_provider.calls == ["AAPL"]
        assert refresher.state == RefreshState.COMPLETED

    def test_cancel_without_running_batch_is_ignored(self, refresher):
        assert refresher.cancel() is False
        assert refresher.state == RefreshState.IDLE

    def test_new_batch_allowed_after_completion(self, refresher, ledger_service):
        ledger_service.buy("AAPL", 1, 100)

        run(refresher.refresh_holdings())
        report = run(refresher.refresh_holdings())

        assert report.success_count == 1


# =============================================================================
# WATCHLIST REFRESH TESTS
# =============================================================================


class TestRefreshWatchlist:
    def test_watchlist_prices_are_updated(self, refresher, watchlist_service, quote_provider):
        """
        GIVEN watched KO and an unknown symbol
        WHEN the watchlist is refreshed
        THEN KO gets the new price and the unknown symbol is reported as failed
        """
        ko = watchlist_service.add("KO", 55)
        watchlist_service.add("ZZZZ", 5)

        report = run(refresher.refresh_watchlist())

        assert report.target == RefreshTarget.WATCHLIST
        assert report.success_count == 1
        assert report.failures == {"ZZZZ": QuoteErrorKind.NOT_FOUND}
        assert watchlist_service.get_item(ko.item_id).current_price == Decimal("60.00")
        assert refresher.last_report is report


@pytest.mark.parametrize("confirmed", [True, False])
def test_prompt_mentions_symbol_count(refresher, ledger_service, confirmed):
    ledger_service.buy("AAPL", 1, 100)
    asked = []

    class Prompter(AutoConfirmPrompter):
        def confirm(self, message):
            asked.append(message)
            return confirmed

    run(refresher.refresh_holdings(Prompter()))

    assert len(asked) == 1
    assert asked[0].startswith("Refresh prices for 1 symbol?")
