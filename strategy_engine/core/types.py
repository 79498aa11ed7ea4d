"""strategy_engine.core.types

Lightweight dataclasses for hot-path objects.

Pydantic models own IO boundaries (see ``backtest.result``); dataclasses keep
the per-bar loop lean.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class PriceBar:
    """One OHLCV observation. Source data is trusted; nothing is validated here."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True, slots=True)
class IndicatorPoint:
    timestamp: datetime
    value: float | None  # None while warming up


@dataclass(frozen=True, slots=True)
class MACDPoint:
    timestamp: datetime
    macd: float | None
    signal: float | None
    histogram: float | None


@dataclass(frozen=True, slots=True)
class BandPoint:
    timestamp: datetime
    upper: float | None
    middle: float | None
    lower: float | None


class SignalAction(StrEnum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True, slots=True)
class Signal:
    action: SignalAction
    symbol: str
    confidence: float  # 0..1
    reason: str
    timestamp: datetime

    def __post_init__(self) -> None:
        c = max(0.0, min(1.0, float(self.confidence)))
        object.__setattr__(self, "confidence", c)

    @classmethod
    def hold(cls, *, symbol: str, reason: str, timestamp: datetime) -> Signal:
        return cls(action=SignalAction.HOLD, symbol=symbol, confidence=0.0, reason=reason, timestamp=timestamp)


@dataclass(frozen=True, slots=True)
class EquityPoint:
    timestamp: datetime
    equity: float
