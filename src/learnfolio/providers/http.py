"""HTTP utilities with quote-error classification."""

import json
import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from learnfolio.core.exceptions import QuoteUnavailableError
from learnfolio.domain.models import QuoteErrorKind

logger = logging.getLogger(__name__)

_SESSION = requests.Session()
_SESSION.mount("https://", HTTPAdapter(pool_connections=4, pool_maxsize=8))


def map_status_to_kind(status: int) -> QuoteErrorKind:
    if status in {401, 403}:
        return QuoteErrorKind.INVALID_CREDENTIAL
    if status == 404:
        return QuoteErrorKind.NOT_FOUND
    if status == 429:
        return QuoteErrorKind.RATE_LIMITED
    return QuoteErrorKind.NETWORK_ERROR


def fetch_json(
    url: str,
    symbol: str,
    params: Optional[dict[str, str]] = None,
    timeout_seconds: float = 15.0,
    session: Optional[requests.Session] = None,
) -> Any:
    """GET a JSON document, raising QuoteUnavailableError on any failure."""
    http = session or _SESSION
    try:
        response = http.get(url, params=params, timeout=timeout_seconds)
    except requests.RequestException as e:
        # The exception text includes the full URL (and API key), so log only its type
        logger.warning("Quote request for %s failed: %s", symbol, type(e).__name__)
        raise QuoteUnavailableError(symbol, QuoteErrorKind.NETWORK_ERROR, "request failed") from e

    if not response.ok:
        raise QuoteUnavailableError(
            symbol,
            map_status_to_kind(response.status_code),
            f"status {response.status_code}",
        )

    try:
        return json.loads(response.text or "{}")
    except json.JSONDecodeError as e:
        raise QuoteUnavailableError(
            symbol, QuoteErrorKind.NETWORK_ERROR, "non-JSON response"
        ) from e
