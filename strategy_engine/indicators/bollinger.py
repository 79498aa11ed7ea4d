"""strategy_engine.indicators.bollinger

Bollinger Bands.

middle = SMA(period); sd = population stddev over the same window,
``sqrt(max(E[x^2] - E[x]^2, 0))``; bands at middle +/- multiplier * sd.
"""

from __future__ import annotations

import math

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import BandPoint, PriceBar
from strategy_engine.indicators.base import Indicator, RollingWindow, require_period


class BollingerBands(Indicator):
    name = "bollinger"

    def __init__(self, period: int = 20, multiplier: float = 2.0) -> None:
        self.period = require_period("period", period)
        if not float(multiplier) > 0:
            raise ConfigError(f"multiplier must be > 0, got {multiplier!r}")
        self.multiplier = float(multiplier)
        self._window = RollingWindow(self.period)
        self._last: BandPoint | None = None

    def update(self, bar: PriceBar) -> BandPoint:
        self._window.push(float(bar.close))
        if not self._window.full:
            point = BandPoint(timestamp=bar.timestamp, upper=None, middle=None, lower=None)
        else:
            middle = self._window.mean()
            width = self.multiplier * math.sqrt(self._window.variance())
            point = BandPoint(timestamp=bar.timestamp, upper=middle + width, middle=middle, lower=middle - width)
        self._last = point
        return point

    def current_value(self) -> BandPoint | None:
        return self._last

    @property
    def ready(self) -> bool:
        return self._last is not None and self._last.middle is not None

    def reset(self) -> None:
        self._window.clear()
        self._last = None

    def _fresh(self) -> BollingerBands:
        return BollingerBands(self.period, self.multiplier)

    def __repr__(self) -> str:
        return f"BollingerBands(period={self.period}, multiplier={self.multiplier})"
