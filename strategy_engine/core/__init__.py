"""strategy_engine.core

Core primitives.

If a module needs to exist, it should probably depend only on this package.
"""

from .config import BacktestConfig, EngineConfig, LoggingConfig, StrategyConfig
from .exceptions import ConfigError, StrategyEngineError
from .time import utc_now
from .types import BandPoint, EquityPoint, IndicatorPoint, MACDPoint, PriceBar, Signal, SignalAction

__all__ = [
    "BacktestConfig",
    "BandPoint",
    "ConfigError",
    "EngineConfig",
    "EquityPoint",
    "IndicatorPoint",
    "LoggingConfig",
    "MACDPoint",
    "PriceBar",
    "Signal",
    "SignalAction",
    "StrategyConfig",
    "StrategyEngineError",
    "utc_now",
]
