"""strategy_engine.backtest.runner

Entry point for collaborators: symbol + cash + strategy config + bars in,
result record out. Bars are expected fully materialized and time-ordered.
"""

from __future__ import annotations

from collections.abc import Sequence

from strategy_engine.backtest.engine import BacktestEngine
from strategy_engine.backtest.result import BacktestResult
from strategy_engine.core.config import EngineConfig, StrategyConfig
from strategy_engine.core.types import PriceBar
from strategy_engine.portfolio.ledger import Portfolio
from strategy_engine.strategies.base import Strategy
from strategy_engine.strategies.registry import strategy_from_config


def run_backtest(
    *,
    symbol: str,
    bars: Sequence[PriceBar],
    strategy: Strategy | StrategyConfig | None = None,
    initial_cash: float | None = None,
    config: EngineConfig | None = None,
) -> BacktestResult:
    cfg = config or EngineConfig()

    if strategy is None:
        strategy = cfg.strategy
    if isinstance(strategy, StrategyConfig):
        strategy = strategy_from_config(strategy, symbol=symbol)

    cash = cfg.backtest.initial_cash if initial_cash is None else float(initial_cash)
    engine = BacktestEngine(
        portfolio=Portfolio(cash),
        strategy=strategy,
        bars=bars,
        symbol=symbol,
        allocation_fraction=cfg.backtest.allocation_fraction,
    )
    engine.run()
    return engine.result(periods_per_year=cfg.backtest.periods_per_year)
