"""Watchlist service for symbols followed without owning them."""

import logging
import threading
import uuid
from dataclasses import replace
from decimal import Decimal

from learnfolio.core.exceptions import NotFoundError, ValidationError
from learnfolio.core.timezone import now_eastern
from learnfolio.core.util import normalize_symbol, to_decimal
from learnfolio.domain.models import WatchlistItem
from learnfolio.domain.views import WatchlistItemView
from learnfolio.repositories.documents import (
    WATCHLIST_KEY,
    DocumentFormatError,
    decode_watchlist,
    encode_watchlist,
)
from learnfolio.repositories.protocols import DocumentStore
from learnfolio.services.valuation import watchlist_view

logger = logging.getLogger(__name__)


class WatchlistService:
    """
    Service for the watchlist.

    Symbols are unique within the watchlist. Entries never touch cash.
    Changes are saved before they become visible and are serialized by a lock.
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._lock = threading.RLock()
        self._items: dict[str, WatchlistItem] = {
            item.item_id: item for item in self._load()
        }

    @property
    def items(self) -> list[WatchlistItem]:
        with self._lock:
            return [replace(item) for item in self._items.values()]

    def get_item(self, item_id: str) -> WatchlistItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError("Watchlist item", item_id)
        return replace(item)

    def symbols(self) -> list[str]:
        with self._lock:
            return [item.symbol for item in self._items.values()]

    def views(self) -> list[WatchlistItemView]:
        with self._lock:
            return [watchlist_view(item) for item in self._items.values()]

    def add(self, symbol: str, price: Decimal) -> WatchlistItem:
        """Start watching a symbol at its current price."""
        normalized = normalize_symbol(symbol)
        if normalized is None:
            raise ValidationError("Watchlist entry requires a symbol")
        price = _positive_price(price)

        item = WatchlistItem(
            item_id=str(uuid.uuid4()),
            symbol=normalized,
            added_price=price,
            current_price=price,
            added_at=now_eastern(),
        )
        with self._lock:
            if normalized in self.symbols():
                raise ValidationError(f"{normalized} is already on the watchlist")
            items = dict(self._items)
            items[item.item_id] = item
            self._commit(items)
        logger.info("Watching %s from %s", normalized, price)
        return replace(item)

    def remove(self, item_id: str) -> None:
        with self._lock:
            items = dict(self._items)
            item = items.pop(item_id, None)
            if item is None:
                raise NotFoundError("Watchlist item", item_id)
            self._commit(items)
        logger.info("Stopped watching %s", item.symbol)

    def apply_price_update(self, item_id: str, new_price: Decimal) -> bool:
        """Set the latest price; returns False if the item was removed meanwhile."""
        new_price = _positive_price(new_price)
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                logger.debug("Price update for missing watchlist item %s ignored", item_id)
                return False
            items = dict(self._items)
            items[item_id] = replace(item, current_price=new_price)
            self._commit(items)
        return True

    def _load(self) -> list[WatchlistItem]:
        document = self._store.load(WATCHLIST_KEY)
        if document is None:
            return []
        try:
            return decode_watchlist(document)
        except DocumentFormatError as e:
            logger.warning("%s; starting with an empty watchlist", e)
            return []

    def _commit(self, items: dict[str, WatchlistItem]) -> None:
        self._store.save(WATCHLIST_KEY, encode_watchlist(list(items.values())))
        self._items = items


def _positive_price(value) -> Decimal:
    try:
        price = to_decimal(value)
    except ValueError as e:
        raise ValidationError("Price must be a number") from e
    if price <= 0:
        raise ValidationError("Price must be greater than 0")
    return price
