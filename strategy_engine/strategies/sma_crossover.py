"""strategy_engine.strategies.sma_crossover

Moving average crossover (long-only):
- BUY when the short SMA crosses above the long SMA while flat
- SELL when the short SMA crosses below the long SMA while holding

A cross is a change relative to the previous bar, not the current ordering.
The first bar with both SMAs ready has no previous bar; it only buys when the
short SMA is already above the long one and we are flat.
"""

from __future__ import annotations

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import PriceBar, Signal, SignalAction
from strategy_engine.indicators.base import require_period
from strategy_engine.indicators.sma import SMA
from strategy_engine.portfolio.ledger import PortfolioView
from strategy_engine.strategies.base import Strategy


class SMACrossoverStrategy(Strategy):
    name = "sma_crossover"

    def __init__(self, symbol: str, long_period: int = 30, short_period: int = 10) -> None:
        super().__init__(symbol)
        self.long_period = require_period("long_period", long_period)
        self.short_period = require_period("short_period", short_period)
        if self.short_period >= self.long_period:
            raise ConfigError("short_period must be < long_period")

        self._short = SMA(self.short_period)
        self._long = SMA(self.long_period)
        self._prev: tuple[float, float] | None = None

    def on_bar(self, bar: PriceBar, portfolio: PortfolioView) -> Signal:
        short = self._short.update(bar).value
        long = self._long.update(bar).value
        if short is None or long is None:
            return self._hold(bar, "SMA not yet calculated")

        prev = self._prev
        self._prev = (short, long)

        flat = portfolio.position(self.symbol) is None
        confidence = min(abs(short - long) / long, 1.0) if long > 0 else 0.0

        if prev is None:
            if flat and short > long:
                return self._signal(bar, SignalAction.BUY, confidence, "short SMA above long SMA")
            return self._hold(bar, "initial state")

        prev_short, prev_long = prev
        if flat and prev_short <= prev_long and short > long:
            return self._signal(bar, SignalAction.BUY, confidence, "short SMA crossed above long SMA")
        if not flat and prev_short >= prev_long and short < long:
            return self._signal(bar, SignalAction.SELL, confidence, "short SMA crossed below long SMA")
        return self._hold(bar, "no crossover")

    def _signal(self, bar: PriceBar, action: SignalAction, confidence: float, reason: str) -> Signal:
        return Signal(action=action, symbol=self.symbol, confidence=confidence, reason=reason, timestamp=bar.timestamp)

    def reset(self) -> None:
        self._short.reset()
        self._long.reset()
        self._prev = None
