"""Stub quote provider for offline/testing use."""

import random
from decimal import Decimal

from learnfolio.core.timezone import now_eastern
from learnfolio.domain.views import Quote, CompanyOverview


# Deterministic fake prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "DIS": Decimal("91.40"),
    "KO": Decimal("60.15"),
    "SPY": Decimal("485.25"),
    "VTI": Decimal("252.30"),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices
    for unknown symbols.
    """

    def __init__(self, seed: int = 42):
        self._rng = random.Random(seed)
        self._generated: dict[str, Decimal] = {}

    def get_quote(self, symbol: str) -> Quote:
        return Quote(symbol=symbol, price=self._price(symbol), as_of=now_eastern())

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        return CompanyOverview(
            symbol=symbol,
            name=f"{symbol} (offline data)",
            sector="Unknown",
            industry="Unknown",
            week_52_high=(self._price(symbol) * Decimal("1.2")).quantize(Decimal("0.01")),
            week_52_low=(self._price(symbol) * Decimal("0.8")).quantize(Decimal("0.01")),
            description="Offline placeholder data; configure a real quote provider for research.",
        )

    def _price(self, symbol: str) -> Decimal:
        if symbol in _STUB_PRICES:
            return _STUB_PRICES[symbol]
        if symbol not in self._generated:
            base_price = Decimal(str(50 + self._rng.random() * 200))
            self._generated[symbol] = base_price.quantize(Decimal("0.01"))
        return self._generated[symbol]
