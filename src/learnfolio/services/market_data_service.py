"""Market data service for quotes and company research."""

import logging

from learnfolio.core.exceptions import ValidationError
from learnfolio.core.timezone import now_eastern
from learnfolio.core.util import normalize_symbol
from learnfolio.domain.views import Quote, CompanyOverview
from learnfolio.providers.quote_provider import QuoteProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching quotes.

    Wraps a provider with symbol normalization and a per-symbol TTL cache.
    Only successful quotes are cached; a failed lookup always raises
    QuoteUnavailableError and is never answered with stale data.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        cache_ttl_seconds: int = 60,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._quote_cache: dict[str, Quote] = {}

    def get_quote(self, symbol: str, use_cache: bool = True) -> Quote:
        """Fetch the latest quote for a symbol."""
        normalized = self._normalize(symbol)

        if use_cache:
            cached = self._quote_cache.get(normalized)
            if cached is not None and self._is_fresh(cached):
                return cached

        quote = self._provider.get_quote(normalized)
        self._quote_cache[normalized] = quote
        logger.debug("Quote %s = %s", normalized, quote.price)
        return quote

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        """Fetch company fundamentals (not cached)."""
        return self._provider.get_company_overview(self._normalize(symbol))

    @staticmethod
    def _normalize(symbol: str) -> str:
        normalized = normalize_symbol(symbol)
        if normalized is None:
            raise ValidationError("Symbol is required")
        return normalized

    def _is_fresh(self, quote: Quote) -> bool:
        elapsed = (now_eastern() - quote.as_of).total_seconds()
        return elapsed < self._cache_ttl
