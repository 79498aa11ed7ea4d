"""strategy_engine.backtest

Simulation loop, metrics and the result record.
"""

from strategy_engine.backtest.engine import DEFAULT_ALLOCATION_FRACTION, BacktestEngine
from strategy_engine.backtest.metrics import Drawdown, WinLoss
from strategy_engine.backtest.result import BacktestResult, EquityPointModel
from strategy_engine.backtest.runner import run_backtest

__all__ = [
    "DEFAULT_ALLOCATION_FRACTION",
    "BacktestEngine",
    "BacktestResult",
    "Drawdown",
    "EquityPointModel",
    "WinLoss",
    "run_backtest",
]
