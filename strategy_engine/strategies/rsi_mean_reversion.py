"""strategy_engine.strategies.rsi_mean_reversion

RSI mean reversion (long-only):
- flat: BUY when RSI < oversold, confidence = (oversold - rsi) / oversold
- holding: SELL when RSI > overbought, or after ``time_stop_bars`` bars
  without an exit

The bar on which a position is first seen arms the time stop and does not
count against it.
"""

from __future__ import annotations

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import PriceBar, Signal, SignalAction
from strategy_engine.indicators.base import require_period
from strategy_engine.indicators.rsi import RSI
from strategy_engine.portfolio.ledger import PortfolioView
from strategy_engine.strategies.base import Strategy


class RSIMeanReversionStrategy(Strategy):
    name = "rsi_mean_reversion"

    def __init__(
        self,
        symbol: str,
        rsi_period: int = 14,
        oversold: float = 30.0,
        overbought: float = 70.0,
        time_stop_bars: int = 5,
    ) -> None:
        super().__init__(symbol)
        self.rsi_period = require_period("rsi_period", rsi_period)
        self.time_stop_bars = require_period("time_stop_bars", time_stop_bars)
        self.oversold = float(oversold)
        self.overbought = float(overbought)
        if not 0.0 < self.oversold < self.overbought < 100.0:
            raise ConfigError("thresholds must satisfy 0 < oversold < overbought < 100")

        self._rsi = RSI(self.rsi_period)
        self._bars_left = self.time_stop_bars
        self._was_holding = False

    def on_bar(self, bar: PriceBar, portfolio: PortfolioView) -> Signal:
        rsi = self._rsi.update(bar).value
        if rsi is None:
            return self._hold(bar, "RSI warming up")

        if portfolio.position(self.symbol) is None:
            self._was_holding = False
            if rsi < self.oversold:
                confidence = (self.oversold - rsi) / self.oversold
                return self._signal(bar, SignalAction.BUY, confidence, f"oversold (RSI {rsi:.1f})")
            return self._hold(bar, f"RSI {rsi:.1f} above oversold")

        if not self._was_holding:
            self._was_holding = True
            self._bars_left = self.time_stop_bars
            return self._hold(bar, "position opened; time stop armed")

        if rsi > self.overbought:
            self._bars_left = self.time_stop_bars
            return self._signal(bar, SignalAction.SELL, 1.0, f"overbought (RSI {rsi:.1f})")

        self._bars_left -= 1
        if self._bars_left <= 0:
            self._bars_left = self.time_stop_bars
            return self._signal(bar, SignalAction.SELL, 1.0, "time stop")
        return self._hold(bar, f"holding; {self._bars_left} bars to time stop")

    def _signal(self, bar: PriceBar, action: SignalAction, confidence: float, reason: str) -> Signal:
        return Signal(action=action, symbol=self.symbol, confidence=confidence, reason=reason, timestamp=bar.timestamp)

    def reset(self) -> None:
        self._rsi.reset()
        self._bars_left = self.time_stop_bars
        self._was_holding = False
