"""Alpha Vantage quote provider."""

from decimal import Decimal
from typing import Any, Optional

import requests

from learnfolio.core.exceptions import QuoteUnavailableError
from learnfolio.core.timezone import now_eastern
from learnfolio.core.util import to_decimal
from learnfolio.domain.models import QuoteErrorKind
from learnfolio.domain.views import Quote, CompanyOverview
from learnfolio.providers.http import fetch_json

ALPHA_VANTAGE_BASE_URL = "https://www.alphavantage.co/query"


def to_number(value: Any) -> Optional[Decimal]:
    """Parse an Alpha Vantage numeric field; "None", "-" and blanks become None."""
    if value is None or value in ("", "None", "-"):
        return None
    try:
        return to_decimal(value)
    except ValueError:
        return None


def classify_error(data: dict) -> Optional[QuoteErrorKind]:
    """
    Classify an error payload returned with HTTP 200.

    Alpha Vantage reports throttling in "Note" or "Information" and bad
    symbols in "Error Message"; key problems can appear in any of them.
    """
    note = data.get("Note") if isinstance(data.get("Note"), str) else None
    information = data.get("Information") if isinstance(data.get("Information"), str) else None
    error_message = data.get("Error Message") if isinstance(data.get("Error Message"), str) else None
    text = note or information or error_message
    if text is None:
        return None
    lower = text.lower()
    if "frequency" in lower or "rate limit" in lower or "per day" in lower:
        return QuoteErrorKind.RATE_LIMITED
    if "api key" in lower or "apikey" in lower:
        return QuoteErrorKind.INVALID_CREDENTIAL
    if error_message:
        return QuoteErrorKind.NOT_FOUND
    return QuoteErrorKind.RATE_LIMITED


class AlphaVantageQuoteProvider:
    """Quote source backed by the Alpha Vantage GLOBAL_QUOTE and OVERVIEW endpoints."""

    def __init__(
        self,
        api_key: Optional[str],
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._session = session

    def get_quote(self, symbol: str) -> Quote:
        data = self._request(symbol, {"function": "GLOBAL_QUOTE", "symbol": symbol})
        quote = data.get("Global Quote")
        # Unknown symbols come back as an empty "Global Quote" object
        if not isinstance(quote, dict) or not quote:
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        price = to_number(quote.get("05. price"))
        if price is None or price <= 0:
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND, "no price")
        return Quote(symbol=symbol, price=price, as_of=now_eastern())

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        data = self._request(symbol, {"function": "OVERVIEW", "symbol": symbol})
        if not data.get("Symbol"):
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        return CompanyOverview(
            symbol=symbol,
            name=data.get("Name"),
            sector=data.get("Sector"),
            industry=data.get("Industry"),
            market_cap=to_number(data.get("MarketCapitalization")),
            pe_ratio=to_number(data.get("PERatio")),
            dividend_yield=to_number(data.get("DividendYield")),
            week_52_high=to_number(data.get("52WeekHigh")),
            week_52_low=to_number(data.get("52WeekLow")),
            description=data.get("Description"),
        )

    def _request(self, symbol: str, params: dict[str, str]) -> dict:
        if not self._api_key:
            raise QuoteUnavailableError(
                symbol, QuoteErrorKind.INVALID_CREDENTIAL, "no API key configured"
            )
        data = fetch_json(
            ALPHA_VANTAGE_BASE_URL,
            symbol,
            params={**params, "apikey": self._api_key},
            timeout_seconds=self._timeout,
            session=self._session,
        )
        if not isinstance(data, dict):
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NETWORK_ERROR, "unexpected payload")
        kind = classify_error(data)
        if kind is not None:
            raise QuoteUnavailableError(symbol, kind)
        return data
