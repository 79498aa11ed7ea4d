"""strategy_engine.strategies.registry

Maps strategy kind names to classes so callers can build strategies from
configuration. New variants register here; the engine never changes.
"""

from __future__ import annotations

from typing import Any

from strategy_engine.core.config import StrategyConfig
from strategy_engine.core.exceptions import ConfigError
from strategy_engine.strategies.base import Strategy
from strategy_engine.strategies.rsi_mean_reversion import RSIMeanReversionStrategy
from strategy_engine.strategies.sma_crossover import SMACrossoverStrategy

STRATEGIES: dict[str, type[Strategy]] = {
    SMACrossoverStrategy.name: SMACrossoverStrategy,
    RSIMeanReversionStrategy.name: RSIMeanReversionStrategy,
}


def register_strategy(kind: str, cls: type[Strategy]) -> None:
    if kind in STRATEGIES and STRATEGIES[kind] is not cls:
        raise ConfigError(f"strategy kind already registered: {kind}")
    STRATEGIES[kind] = cls


def build_strategy(kind: str, *, symbol: str, params: dict[str, Any] | None = None) -> Strategy:
    cls = STRATEGIES.get(kind)
    if cls is None:
        known = ", ".join(sorted(STRATEGIES))
        raise ConfigError(f"unknown strategy kind {kind!r} (known: {known})")
    try:
        return cls(symbol, **(params or {}))
    except TypeError as e:
        raise ConfigError(f"bad parameters for {kind}: {e}") from e


def strategy_from_config(cfg: StrategyConfig, *, symbol: str) -> Strategy:
    return build_strategy(cfg.kind, symbol=symbol, params=cfg.params)
