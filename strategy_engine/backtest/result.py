"""strategy_engine.backtest.result

Result record handed to the outside world (API layer, persistence).
Pydantic owns this boundary; ``model_dump(mode="json")`` is the wire form.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class EquityPointModel(BaseModel):
    timestamp: datetime
    equity: float


class BacktestResult(BaseModel):
    symbol: str
    strategy: str
    start_date: datetime | None = None
    end_date: datetime | None = None

    initial_capital: float
    final_value: float
    total_return: float  # currency
    total_return_percent: float

    trade_count: int
    winning_trades: int
    losing_trades: int
    win_rate: float

    max_drawdown: float
    max_drawdown_percent: float
    sharpe_ratio: float

    equity_curve: list[EquityPointModel] = Field(default_factory=list)
