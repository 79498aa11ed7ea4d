"""strategy_engine.indicators.rsi

Relative Strength Index with Wilder smoothing.

Seed: simple average of the first ``period`` gains/losses. After that:
``avg = (avg * (period - 1) + x) / period``.

Edge conventions:
- avg_loss == 0 -> 100 (this includes the flat case where both are 0)
- avg_gain == 0 -> 0
"""

from __future__ import annotations

from strategy_engine.core.types import IndicatorPoint, PriceBar
from strategy_engine.indicators.base import Indicator, require_period


def rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0.0:
        # Flat series lands here too; kept at 100 for compatibility.
        return 100.0
    if avg_gain == 0.0:
        return 0.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


class RSI(Indicator):
    name = "rsi"

    def __init__(self, period: int = 14) -> None:
        self.period = require_period("period", period)
        self.reset()

    def push(self, close: float) -> float | None:
        close = float(close)
        prev = self._prev_close
        self._prev_close = close
        if prev is None:
            return None

        change = close - prev
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        n = self.period

        if self._avg_gain is None or self._avg_loss is None:
            self._gain_sum += gain
            self._loss_sum += loss
            self._changes += 1
            if self._changes < n:
                return None
            self._avg_gain = self._gain_sum / n
            self._avg_loss = self._loss_sum / n
        else:
            self._avg_gain = (self._avg_gain * (n - 1) + gain) / n
            self._avg_loss = (self._avg_loss * (n - 1) + loss) / n

        self._value = rsi_from_averages(self._avg_gain, self._avg_loss)
        return self._value

    def update(self, bar: PriceBar) -> IndicatorPoint:
        return IndicatorPoint(timestamp=bar.timestamp, value=self.push(bar.close))

    def current_value(self) -> float | None:
        return self._value

    @property
    def ready(self) -> bool:
        return self._value is not None

    def reset(self) -> None:
        self._prev_close: float | None = None
        self._gain_sum = 0.0
        self._loss_sum = 0.0
        self._changes = 0
        self._avg_gain: float | None = None
        self._avg_loss: float | None = None
        self._value: float | None = None

    def _fresh(self) -> RSI:
        return RSI(self.period)

    def __repr__(self) -> str:
        return f"RSI(period={self.period})"
