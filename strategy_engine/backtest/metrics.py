"""strategy_engine.backtest.metrics

Performance metrics derived from the equity curve and the trade log.

Pure functions; the engine calls them on demand rather than storing results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from strategy_engine.core.types import EquityPoint
from strategy_engine.portfolio.types import Trade, TradeKind


@dataclass(frozen=True, slots=True)
class Drawdown:
    absolute: float
    percent: float  # of the running peak where the max drawdown occurs


@dataclass(frozen=True, slots=True)
class WinLoss:
    wins: int
    losses: int

    @property
    def closed(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        return self.wins / self.closed if self.closed else 0.0


def equity_array(history: Sequence[EquityPoint]) -> np.ndarray:
    return np.array([p.equity for p in history], dtype=np.float64)


def final_return(equity: np.ndarray) -> float:
    if equity.size == 0:
        return 0.0
    first = float(equity[0])
    if first == 0.0:
        return 0.0
    return (float(equity[-1]) - first) / first


def max_drawdown(equity: np.ndarray) -> Drawdown:
    if equity.size == 0:
        return Drawdown(absolute=0.0, percent=0.0)
    peak = np.maximum.accumulate(equity)
    dd = peak - equity
    i = int(np.argmax(dd))
    absolute = float(dd[i])
    at_peak = float(peak[i])
    percent = absolute / at_peak * 100.0 if at_peak != 0.0 else 0.0
    return Drawdown(absolute=absolute, percent=percent)


def win_loss_count(trades: Iterable[Trade]) -> WinLoss:
    """Classify each sell against the volume-weighted cost of earlier buys.

    Only buys of the same symbol dated strictly before the sell count. A sell
    at exactly that average is neither a win nor a loss.
    """

    log = list(trades)
    buys = [t for t in log if t.kind is TradeKind.BUY]
    wins = losses = 0
    for sell in (t for t in log if t.kind is TradeKind.SELL):
        prior = [b for b in buys if b.symbol == sell.symbol and b.timestamp < sell.timestamp]
        shares = sum(b.shares for b in prior)
        if shares <= 0:
            continue
        avg_cost = sum(b.shares * b.price for b in prior) / shares
        if sell.price > avg_cost:
            wins += 1
        elif sell.price < avg_cost:
            losses += 1
    return WinLoss(wins=wins, losses=losses)


def bar_returns(equity: np.ndarray) -> np.ndarray:
    if equity.size < 2:
        return np.zeros(0, dtype=np.float64)
    prev = equity[:-1]
    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.where(prev != 0.0, equity[1:] / prev - 1.0, 0.0)
    return r.astype(np.float64)


def sharpe_ratio(equity: np.ndarray, *, periods_per_year: int = 252) -> float:
    r = bar_returns(equity)
    if r.size < 2:
        return 0.0
    mu = float(np.mean(r))
    sd = float(np.std(r, ddof=1))
    if sd == 0.0:
        return 0.0
    return float((mu / sd) * np.sqrt(periods_per_year))
