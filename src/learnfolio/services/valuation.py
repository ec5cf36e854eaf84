"""Valuation of holdings: pure functions over a ledger snapshot."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from learnfolio.core.util import round_money
from learnfolio.domain.models import Holding, WatchlistItem
from learnfolio.domain.views import (
    AllocationItem,
    AllocationView,
    HoldingValuation,
    PortfolioSummary,
    WatchlistItemView,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def market_value(holding: Holding) -> Decimal:
    return holding.shares * holding.current_price


def gain_loss(holding: Holding) -> Decimal:
    return holding.shares * (holding.current_price - holding.buy_price)


def gain_loss_percent(holding: Holding) -> Optional[Decimal]:
    """Percent change from cost basis; None (N/A) when the cost basis is zero."""
    return _percent_change(holding.buy_price, holding.current_price)


def total_value(holdings: Iterable[Holding]) -> Decimal:
    return sum((market_value(h) for h in holdings), ZERO)


def total_gain_loss(holdings: Iterable[Holding]) -> Decimal:
    return sum((gain_loss(h) for h in holdings), ZERO)


def best_performer(holdings: Iterable[Holding]) -> Optional[Holding]:
    """
    Holding with the highest gain/loss percent.

    Ties go to the first holding encountered; holdings whose percent is N/A
    are skipped. Returns None for an empty collection.
    """
    best: Optional[Holding] = None
    best_percent: Optional[Decimal] = None
    for holding in holdings:
        percent = gain_loss_percent(holding)
        if percent is None:
            continue
        if best_percent is None or percent > best_percent:
            best, best_percent = holding, percent
    return best


def value_holding(holding: Holding) -> HoldingValuation:
    """Build the display valuation of one holding."""
    percent = gain_loss_percent(holding)
    return HoldingValuation(
        holding_id=holding.holding_id,
        symbol=holding.symbol,
        name=holding.name or holding.symbol,
        shares=holding.shares,
        buy_price=holding.buy_price,
        current_price=holding.current_price,
        market_value=round_money(market_value(holding)),
        gain_loss=round_money(gain_loss(holding)),
        gain_loss_percent=percent.quantize(Decimal("0.1")) if percent is not None else None,
        acquired_at=holding.acquired_at,
    )


def summarize(holdings: list[Holding], cash: Decimal) -> PortfolioSummary:
    """Aggregate cash and holdings into a portfolio summary."""
    value = total_value(holdings)
    best = best_performer(holdings)
    return PortfolioSummary(
        cash=round_money(cash),
        total_value=round_money(value),
        total_gain_loss=round_money(total_gain_loss(holdings)),
        net_worth=round_money(cash + value),
        holding_count=len(holdings),
        best_performer=value_holding(best) if best is not None else None,
        holdings=[value_holding(h) for h in holdings],
    )


def allocation(holdings: list[Holding]) -> AllocationView:
    """
    Market value and share of the portfolio per symbol.

    Lots of the same symbol are combined; items are sorted by value descending.
    """
    by_symbol: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for holding in holdings:
        by_symbol[holding.symbol] += market_value(holding)

    total = sum(by_symbol.values(), ZERO)
    items = [
        AllocationItem(
            symbol=symbol,
            market_value=round_money(value),
            percentage=round_money(value / total * HUNDRED) if total != ZERO else ZERO,
        )
        for symbol, value in by_symbol.items()
    ]
    items.sort(key=lambda x: x.market_value, reverse=True)
    return AllocationView(items=items, total_value=round_money(total))


def watchlist_change_percent(item: WatchlistItem) -> Optional[Decimal]:
    """Percent move since the symbol was added to the watchlist."""
    return _percent_change(item.added_price, item.current_price)


def watchlist_view(item: WatchlistItem) -> WatchlistItemView:
    percent = watchlist_change_percent(item)
    return WatchlistItemView(
        item_id=item.item_id,
        symbol=item.symbol,
        added_price=item.added_price,
        current_price=item.current_price,
        change_percent=percent.quantize(Decimal("0.1")) if percent is not None else None,
        added_at=item.added_at,
    )


def _percent_change(base: Decimal, current: Decimal) -> Optional[Decimal]:
    if base == ZERO:
        return None
    return (current - base) / base * HUNDRED
