"""strategy_engine.indicators.sma

Simple moving average of closes over a running-sum window.
"""

from __future__ import annotations

from strategy_engine.core.types import IndicatorPoint, PriceBar
from strategy_engine.indicators.base import Indicator, RollingWindow, require_period


class SMA(Indicator):
    name = "sma"

    def __init__(self, period: int = 20) -> None:
        self.period = require_period("period", period)
        self._window = RollingWindow(self.period)
        self._value: float | None = None

    def push(self, x: float) -> float | None:
        self._window.push(float(x))
        self._value = self._window.mean() if self._window.full else None
        return self._value

    def update(self, bar: PriceBar) -> IndicatorPoint:
        return IndicatorPoint(timestamp=bar.timestamp, value=self.push(bar.close))

    def current_value(self) -> float | None:
        return self._value

    @property
    def ready(self) -> bool:
        return self._value is not None

    def reset(self) -> None:
        self._window.clear()
        self._value = None

    def _fresh(self) -> SMA:
        return SMA(self.period)

    def __repr__(self) -> str:
        return f"SMA(period={self.period})"
