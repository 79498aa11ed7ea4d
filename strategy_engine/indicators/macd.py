"""strategy_engine.indicators.macd

MACD = EMA(fast) - EMA(slow) on closes.
Signal = EMA(signal_period) over the MACD line values.
Histogram = MACD - signal.

The MACD line is ready after ``slow`` bars; the signal line warms up on top of
it, so signal/histogram stay None for another ``signal_period - 1`` bars.
"""

from __future__ import annotations

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import MACDPoint, PriceBar
from strategy_engine.indicators.base import Indicator, require_period
from strategy_engine.indicators.ema import EMA


class MACD(Indicator):
    name = "macd"

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9) -> None:
        self.fast_period = require_period("fast_period", fast_period)
        self.slow_period = require_period("slow_period", slow_period)
        self.signal_period = require_period("signal_period", signal_period)
        if self.fast_period >= self.slow_period:
            raise ConfigError("fast_period must be < slow_period")

        self._fast = EMA(self.fast_period)
        self._slow = EMA(self.slow_period)
        self._signal = EMA(self.signal_period)
        self._last: MACDPoint | None = None

    def update(self, bar: PriceBar) -> MACDPoint:
        f = self._fast.push(bar.close)
        s = self._slow.push(bar.close)
        if f is None or s is None:
            point = MACDPoint(timestamp=bar.timestamp, macd=None, signal=None, histogram=None)
        else:
            line = f - s
            sig = self._signal.push(line)
            hist = line - sig if sig is not None else None
            point = MACDPoint(timestamp=bar.timestamp, macd=line, signal=sig, histogram=hist)
        self._last = point
        return point

    def current_value(self) -> MACDPoint | None:
        return self._last

    @property
    def ready(self) -> bool:
        return self._last is not None and self._last.macd is not None

    def reset(self) -> None:
        self._fast.reset()
        self._slow.reset()
        self._signal.reset()
        self._last = None

    def _fresh(self) -> MACD:
        return MACD(self.fast_period, self.slow_period, self.signal_period)

    def __repr__(self) -> str:
        return f"MACD(fast={self.fast_period}, slow={self.slow_period}, signal={self.signal_period})"
