"""Quote providers module."""

from learnfolio.config.settings import Settings
from learnfolio.providers.quote_provider import QuoteProvider
from learnfolio.providers.stub_provider import StubQuoteProvider
from learnfolio.providers.alpha_vantage_provider import AlphaVantageQuoteProvider
from learnfolio.providers.yahoo_provider import YahooQuoteProvider


def build_quote_provider(settings: Settings) -> QuoteProvider:
    """Create the quote provider selected in settings."""
    if settings.quote_provider == "alphavantage":
        return AlphaVantageQuoteProvider(
            api_key=settings.alpha_vantage_api_key,
            timeout_seconds=settings.quote_timeout_seconds,
        )
    if settings.quote_provider == "yahoo":
        return YahooQuoteProvider()
    return StubQuoteProvider()


__all__ = [
    "QuoteProvider",
    "StubQuoteProvider",
    "AlphaVantageQuoteProvider",
    "YahooQuoteProvider",
    "build_quote_provider",
]
