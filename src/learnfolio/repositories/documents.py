"""JSON encoding of the persisted documents.

Documents use the same camelCase shape the browser version kept in local
storage, so previously saved data loads unchanged:

- ``cash``: a decimal string, e.g. ``"1234.56"``
- ``portfolio``: ``[{"id", "symbol", "name", "shares", "buyPrice",
  "currentPrice", "acquiredAt"}]``
- ``watchlist``: ``[{"id", "symbol", "addedPrice", "currentPrice", "addedAt"}]``
"""

import json
from decimal import Decimal
from typing import Any

from learnfolio.core.timezone import now_eastern, parse_timestamp, to_iso
from learnfolio.core.util import normalize_symbol, to_decimal
from learnfolio.domain.models import Holding, WatchlistItem

CASH_KEY = "cash"
PORTFOLIO_KEY = "portfolio"
WATCHLIST_KEY = "watchlist"


class DocumentFormatError(ValueError):
    """Raised when a stored document cannot be decoded."""


def encode_cash(cash: Decimal) -> str:
    return str(cash)


def decode_cash(document: str) -> Decimal:
    try:
        cash = to_decimal(json.loads(document, parse_float=Decimal))
        if cash < 0:
            raise ValueError("negative cash")
        return cash
    except (json.JSONDecodeError, ValueError, TypeError) as e:
        raise DocumentFormatError(f"Invalid cash document: {document!r}") from e


def encode_holdings(holdings: list[Holding]) -> str:
    return json.dumps(
        [
            {
                "id": h.holding_id,
                "symbol": h.symbol,
                "name": h.name,
                "shares": str(h.shares),
                "buyPrice": str(h.buy_price),
                "currentPrice": str(h.current_price),
                "acquiredAt": to_iso(h.acquired_at),
            }
            for h in holdings
        ]
    )


def decode_holdings(document: str) -> list[Holding]:
    try:
        return [_decode_holding(raw) for raw in _load_list(document)]
    except (KeyError, ValueError, TypeError, OverflowError) as e:
        raise DocumentFormatError(f"Invalid portfolio document: {e}") from e


def encode_watchlist(items: list[WatchlistItem]) -> str:
    return json.dumps(
        [
            {
                "id": item.item_id,
                "symbol": item.symbol,
                "addedPrice": str(item.added_price),
                "currentPrice": str(item.current_price),
                "addedAt": to_iso(item.added_at),
            }
            for item in items
        ]
    )


def decode_watchlist(document: str) -> list[WatchlistItem]:
    try:
        items = []
        for raw in _load_list(document):
            added_price = _positive(raw["addedPrice"], "addedPrice")
            items.append(
                WatchlistItem(
                    item_id=str(raw["id"]),
                    symbol=_required_symbol(raw),
                    added_price=added_price,
                    current_price=_positive(raw.get("currentPrice", added_price), "currentPrice"),
                    added_at=_timestamp(raw.get("addedAt")),
                )
            )
        return items
    except (KeyError, ValueError, TypeError, OverflowError) as e:
        raise DocumentFormatError(f"Invalid watchlist document: {e}") from e


def _load_list(document: str) -> list[dict[str, Any]]:
    data = json.loads(document, parse_float=Decimal)
    if not isinstance(data, list) or not all(isinstance(raw, dict) for raw in data):
        raise ValueError("expected a JSON array of objects")
    return data


def _decode_holding(raw: dict[str, Any]) -> Holding:
    buy_price = _positive(raw["buyPrice"], "buyPrice")
    return Holding(
        holding_id=str(raw["id"]),
        symbol=_required_symbol(raw),
        shares=_positive(raw["shares"], "shares"),
        buy_price=buy_price,
        current_price=_positive(raw.get("currentPrice", buy_price), "currentPrice"),
        acquired_at=_timestamp(raw.get("acquiredAt")),
        name=raw.get("name"),
    )


def _required_symbol(raw: dict[str, Any]) -> str:
    value = raw.get("symbol")
    symbol = normalize_symbol(value) if isinstance(value, str) else None
    if symbol is None:
        raise ValueError("missing symbol")
    return symbol


def _positive(value: Any, field_name: str) -> Decimal:
    number = to_decimal(value)
    if number <= 0:
        raise ValueError(f"{field_name} must be greater than 0, got {number}")
    return number


def _timestamp(value: Any):
    # Older documents carry no timestamp
    return parse_timestamp(value) if value is not None else now_eastern()
