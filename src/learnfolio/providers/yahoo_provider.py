"""Yahoo Finance quote provider via yfinance."""

import logging
from typing import Any, Optional

from learnfolio.core.exceptions import QuoteUnavailableError
from learnfolio.core.timezone import now_eastern
from learnfolio.domain.models import QuoteErrorKind
from learnfolio.domain.views import Quote, CompanyOverview
from learnfolio.providers.alpha_vantage_provider import to_number

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


class YahooQuoteProvider:
    """
    Quote source backed by yfinance ``Ticker.info``.

    Price: currentPrice preferred, then regularMarketPrice.
    """

    def get_quote(self, symbol: str) -> Quote:
        info = self._info(symbol)
        price = to_number(info.get("currentPrice"))
        if price is None:
            price = to_number(info.get("regularMarketPrice"))
        if price is None or price <= 0:
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        return Quote(symbol=symbol, price=price, as_of=now_eastern())

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        info = self._info(symbol)
        name = (info.get("longName") or info.get("shortName") or "").strip() or None
        if name is None and not info.get("sector"):
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        return CompanyOverview(
            symbol=symbol,
            name=name,
            sector=info.get("sector"),
            industry=info.get("industry"),
            market_cap=to_number(info.get("marketCap")),
            pe_ratio=to_number(info.get("trailingPE")),
            dividend_yield=to_number(info.get("dividendYield")),
            week_52_high=to_number(info.get("fiftyTwoWeekHigh")),
            week_52_low=to_number(info.get("fiftyTwoWeekLow")),
            description=info.get("longBusinessSummary"),
        )

    @staticmethod
    def _info(symbol: str) -> dict[str, Any]:
        yf = _get_yf()
        try:
            info: Optional[dict] = yf.Ticker(symbol).info
        except Exception as e:
            # yfinance raises assorted exception types for HTTP and parsing failures
            logger.warning("yfinance lookup for %s failed: %s", symbol, e)
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NETWORK_ERROR, str(e)) from e
        if not isinstance(info, dict) or not info:
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        return info
