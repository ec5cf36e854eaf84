"""Ledger service owning the cash balance and the holdings collection."""

import logging
import threading
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional, Union

from learnfolio.config.settings import Settings
from learnfolio.core.exceptions import (
    InsufficientFundsError,
    NotFoundError,
    ValidationError,
)
from learnfolio.core.timezone import now_eastern
from learnfolio.core.util import normalize_symbol, to_decimal
from learnfolio.domain.models import Holding
from learnfolio.repositories.documents import (
    CASH_KEY,
    PORTFOLIO_KEY,
    DocumentFormatError,
    decode_cash,
    decode_holdings,
    encode_cash,
    encode_holdings,
)
from learnfolio.repositories.protocols import DocumentStore

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]
ZERO = Decimal("0")


@dataclass(frozen=True)
class LedgerSeed:
    """Starting state used when nothing has been persisted yet."""

    cash: Decimal = Decimal("2.66")
    symbol: Optional[str] = "AAPL"
    name: Optional[str] = "Apple"
    shares: Decimal = Decimal("5")
    buy_price: Decimal = Decimal("150")
    current_price: Decimal = Decimal("180")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerSeed":
        return cls(
            cash=settings.default_cash,
            symbol=normalize_symbol(settings.seed_symbol),
            name=settings.seed_name,
            shares=settings.seed_shares,
            buy_price=settings.seed_buy_price,
            current_price=settings.seed_current_price,
        )

    def holdings(self) -> list[Holding]:
        if not self.symbol or self.shares <= 0:
            return []
        return [
            Holding(
                holding_id=str(uuid.uuid4()),
                symbol=self.symbol,
                name=self.name,
                shares=self.shares,
                buy_price=self.buy_price,
                current_price=self.current_price,
                acquired_at=now_eastern(),
            )
        ]


class LedgerService:
    """
    Service for the simulated brokerage ledger.

    Owns the cash balance and the holdings (one entry per purchased lot).
    Every mutation validates, saves the new cash and portfolio documents
    together, and only then adopts the new state, so a rejected operation
    or a failed save leaves nothing changed. Mutations are serialized by a
    lock held from the balance check through the save.
    Invariants after any operation: cash >= 0 and every holding has shares > 0.
    """

    def __init__(self, store: DocumentStore, seed: Optional[LedgerSeed] = None):
        self._store = store
        self._lock = threading.RLock()
        seed = seed or LedgerSeed()
        self._cash = self._load_cash(seed)
        self._holdings: dict[str, Holding] = {
            h.holding_id: h for h in self._load_holdings(seed)
        }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def cash(self) -> Decimal:
        """Current cash balance."""
        return self._cash

    @property
    def holdings(self) -> list[Holding]:
        """Snapshot of holdings in purchase order."""
        with self._lock:
            return [replace(h) for h in self._holdings.values()]

    def get_holding(self, holding_id: str) -> Holding:
        """Get a copy of one holding by ID."""
        holding = self._holdings.get(holding_id)
        if holding is None:
            raise NotFoundError("Holding", holding_id)
        return replace(holding)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def adjust_cash(self, delta: Number) -> Decimal:
        """
        Add a signed amount to cash and return the new balance.

        Raises InsufficientFundsError if the balance would go negative;
        deposits never fail.
        """
        delta = _number(delta, "Cash adjustment")
        with self._lock:
            balance = self._cash + delta
            if balance < ZERO:
                raise InsufficientFundsError(requested=-delta, available=self._cash)
            self._commit(cash=balance)
        logger.info("Cash adjusted by %s, balance %s", delta, balance)
        return balance

    def deposit(self, amount: Number) -> Decimal:
        """Add cash; amount must be positive."""
        return self.adjust_cash(_positive(amount, "Deposit amount"))

    def withdraw(self, amount: Number) -> Decimal:
        """Remove cash; amount must be positive and covered by the balance."""
        return self.adjust_cash(-_positive(amount, "Withdrawal amount"))

    def buy(
        self,
        symbol: str,
        shares: Number,
        unit_price: Number,
        name: Optional[str] = None,
    ) -> str:
        """
        Buy a new lot and return its holding ID.

        Each purchase is its own lot; buying a symbol already held does not
        average into the existing lot.
        """
        normalized = normalize_symbol(symbol)
        if normalized is None:
            raise ValidationError("Buy requires a symbol")
        shares = _positive(shares, "Shares")
        unit_price = _positive(unit_price, "Price")
        cost = shares * unit_price

        holding = Holding(
            holding_id=str(uuid.uuid4()),
            symbol=normalized,
            name=(name or "").strip() or None,
            shares=shares,
            buy_price=unit_price,
            current_price=unit_price,
            acquired_at=now_eastern(),
        )
        with self._lock:
            if cost > self._cash:
                raise InsufficientFundsError(requested=cost, available=self._cash)
            holdings = dict(self._holdings)
            holdings[holding.holding_id] = holding
            self._commit(cash=self._cash - cost, holdings=holdings)
        logger.info("Bought %s %s @ %s (lot %s)", shares, normalized, unit_price, holding.holding_id)
        return holding.holding_id

    def sell(self, holding_id: str) -> Decimal:
        """Sell a whole lot at its latest known price and return the amount credited."""
        with self._lock:
            holdings = dict(self._holdings)
            holding = holdings.pop(holding_id, None)
            if holding is None:
                raise NotFoundError("Holding", holding_id)
            proceeds = holding.shares * holding.current_price
            self._commit(cash=self._cash + proceeds, holdings=holdings)
        logger.info("Sold %s %s for %s (lot %s)", holding.shares, holding.symbol, proceeds, holding_id)
        return proceeds

    def edit_holding(
        self,
        holding_id: str,
        new_shares: Number,
        new_buy_price: Number,
    ) -> Decimal:
        """
        Correct a lot's shares and cost basis, settling the cost difference in cash.

        A higher total cost is debited (and must be affordable); a lower one is
        refunded. The current price is left as is. Returns the cost difference.
        """
        with self._lock:
            holding = self._holdings.get(holding_id)
            if holding is None:
                raise NotFoundError("Holding", holding_id)
            new_shares = _positive(new_shares, "Shares")
            new_buy_price = _positive(new_buy_price, "Buy price")

            cost_difference = new_shares * new_buy_price - holding.cost
            if cost_difference > self._cash:
                raise InsufficientFundsError(requested=cost_difference, available=self._cash)

            holdings = dict(self._holdings)
            holdings[holding_id] = replace(holding, shares=new_shares, buy_price=new_buy_price)
            self._commit(cash=self._cash - cost_difference, holdings=holdings)
        logger.info(
            "Edited lot %s: %s %s @ %s (cash %+.2f)",
            holding_id, new_shares, holding.symbol, new_buy_price, -cost_difference,
        )
        return cost_difference

    def liquidate_all(self) -> Decimal:
        """Sell every lot at its latest known price; returns the total credited."""
        with self._lock:
            if not self._holdings:
                return ZERO
            proceeds = sum((h.shares * h.current_price for h in self._holdings.values()), ZERO)
            count = len(self._holdings)
            self._commit(cash=self._cash + proceeds, holdings={})
        logger.info("Liquidated %d lots for %s", count, proceeds)
        return proceeds

    def apply_price_update(self, holding_id: str, new_price: Number) -> bool:
        """
        Set the latest market price of a lot; cash is untouched.

        Returns False without raising when the lot no longer exists, which
        happens when it was sold while a refresh was in flight.
        """
        new_price = _positive(new_price, "Price")
        with self._lock:
            holding = self._holdings.get(holding_id)
            if holding is None:
                logger.debug("Price update for missing lot %s ignored", holding_id)
                return False
            holdings = dict(self._holdings)
            holdings[holding_id] = replace(holding, current_price=new_price)
            self._commit(holdings=holdings)
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_cash(self, seed: LedgerSeed) -> Decimal:
        document = self._store.load(CASH_KEY)
        if document is None:
            return seed.cash
        try:
            return decode_cash(document)
        except DocumentFormatError as e:
            logger.warning("%s; starting from default cash", e)
            return seed.cash

    def _load_holdings(self, seed: LedgerSeed) -> list[Holding]:
        document = self._store.load(PORTFOLIO_KEY)
        if document is None:
            return seed.holdings()
        try:
            return decode_holdings(document)
        except DocumentFormatError as e:
            logger.warning("%s; starting from default portfolio", e)
            return seed.holdings()

    def _commit(
        self,
        cash: Optional[Decimal] = None,
        holdings: Optional[dict[str, Holding]] = None,
    ) -> None:
        """Save the given state in one write, then adopt it. Caller holds the lock."""
        documents = {}
        if holdings is not None:
            documents[PORTFOLIO_KEY] = encode_holdings(list(holdings.values()))
        if cash is not None:
            documents[CASH_KEY] = encode_cash(cash)
        self._store.save_many(documents)
        if holdings is not None:
            self._holdings = holdings
        if cash is not None:
            self._cash = cash


def _number(value: Number, label: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as e:
        raise ValidationError(f"{label} must be a number") from e


def _positive(value: Number, label: str) -> Decimal:
    number = _number(value, label)
    if number <= ZERO:
        raise ValidationError(f"{label} must be greater than 0")
    return number
