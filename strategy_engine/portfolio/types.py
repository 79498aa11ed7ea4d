"""strategy_engine.portfolio.types

Ledger records. Frozen: the ledger swaps entries instead of mutating them, so
any snapshot handed out stays valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class PositionSide(StrEnum):
    LONG = "LONG"
    SHORT = "SHORT"  # tag only; no short-selling mechanics


class TradeKind(StrEnum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True, slots=True)
class Position:
    symbol: str
    shares: float  # > 0 while held
    average_cost: float  # per share, volume-weighted over buys
    side: PositionSide = PositionSide.LONG

    def market_value(self, price: float) -> float:
        return self.shares * float(price)


@dataclass(frozen=True, slots=True)
class Trade:
    symbol: str
    shares: float
    price: float  # per share
    kind: TradeKind
    timestamp: datetime
