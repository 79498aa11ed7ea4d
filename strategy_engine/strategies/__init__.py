"""strategy_engine.strategies

Rule-based strategies. Each reacts to a bar and emits a Signal.
"""

from strategy_engine.strategies.base import Strategy
from strategy_engine.strategies.registry import STRATEGIES, build_strategy, register_strategy, strategy_from_config
from strategy_engine.strategies.rsi_mean_reversion import RSIMeanReversionStrategy
from strategy_engine.strategies.sma_crossover import SMACrossoverStrategy

__all__ = [
    "STRATEGIES",
    "RSIMeanReversionStrategy",
    "SMACrossoverStrategy",
    "Strategy",
    "build_strategy",
    "register_strategy",
    "strategy_from_config",
]
