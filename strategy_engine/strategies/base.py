"""strategy_engine.strategies.base

Strategy contract.

A strategy reacts to one bar at a time and returns a Signal. It sees the
ledger through a read-only view and never executes trades itself; the
backtest engine turns signals into fills.

``reset()`` must restore post-construction state so the same instance can be
replayed with identical results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import PriceBar, Signal
from strategy_engine.portfolio.ledger import PortfolioView


class Strategy(ABC):
    name: str = "strategy"

    def __init__(self, symbol: str) -> None:
        if not isinstance(symbol, str) or not symbol.strip():
            raise ConfigError("strategy symbol must not be empty")
        self.symbol = symbol

    @abstractmethod
    def on_bar(self, bar: PriceBar, portfolio: PortfolioView) -> Signal:
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    def _hold(self, bar: PriceBar, reason: str) -> Signal:
        return Signal.hold(symbol=self.symbol, reason=reason, timestamp=bar.timestamp)
