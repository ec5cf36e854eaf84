"""Quote provider protocol."""

from typing import Protocol

from learnfolio.domain.views import Quote, CompanyOverview


class QuoteProvider(Protocol):
    """
    Protocol for quote sources.

    Implementations return a positive price per call, or raise
    QuoteUnavailableError classified as NOT_FOUND, RATE_LIMITED,
    NETWORK_ERROR or INVALID_CREDENTIAL.
    """

    def get_quote(self, symbol: str) -> Quote:
        """Fetch the latest price for one (already normalized) symbol."""
        ...

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        """Fetch company fundamentals for the research screen."""
        ...
