"""strategy_engine.indicators.ema

Exponential moving average.

- multiplier k = 2 / (period + 1)
- seed: SMA of the first ``period`` values
- then ``ema = (x - prev) * k + prev``

``push`` accepts raw values so EMA can run over derived series (MACD signal).
"""

from __future__ import annotations

from strategy_engine.core.types import IndicatorPoint, PriceBar
from strategy_engine.indicators.base import Indicator, RollingWindow, require_period


class EMA(Indicator):
    name = "ema"

    def __init__(self, period: int = 20) -> None:
        self.period = require_period("period", period)
        self.multiplier = 2.0 / (self.period + 1)
        self._seed = RollingWindow(self.period)
        self._value: float | None = None

    def push(self, x: float) -> float | None:
        x = float(x)
        if self._value is None:
            self._seed.push(x)
            if self._seed.full:
                self._value = self._seed.mean()
                self._seed.clear()
            return self._value

        self._value = (x - self._value) * self.multiplier + self._value
        return self._value

    def update(self, bar: PriceBar) -> IndicatorPoint:
        return IndicatorPoint(timestamp=bar.timestamp, value=self.push(bar.close))

    def current_value(self) -> float | None:
        return self._value

    @property
    def ready(self) -> bool:
        return self._value is not None

    def reset(self) -> None:
        self._seed.clear()
        self._value = None

    def _fresh(self) -> EMA:
        return EMA(self.period)

    def __repr__(self) -> str:
        return f"EMA(period={self.period})"
