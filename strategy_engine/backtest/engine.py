"""strategy_engine.backtest.engine

Bar-by-bar backtest loop.

Per bar:
- strategy.on_bar(bar, read-only ledger view) -> Signal
- BUY: size = floor(cash * allocation_fraction * confidence / close), fill at close
- SELL: exit the whole position at close
- HOLD: nothing
- record equity = cash + shares * close

Single asset, single thread, no I/O inside the loop. ``run()`` resets ledger,
strategy and history first, so repeated runs over the same bars are identical.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from strategy_engine.backtest.metrics import (
    Drawdown,
    WinLoss,
    equity_array,
    final_return,
    max_drawdown,
    sharpe_ratio,
    win_loss_count,
)
from strategy_engine.backtest.result import BacktestResult, EquityPointModel
from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import EquityPoint, PriceBar, Signal, SignalAction
from strategy_engine.portfolio.ledger import Portfolio
from strategy_engine.portfolio.types import Trade
from strategy_engine.strategies.base import Strategy

logger = logging.getLogger(__name__)

DEFAULT_ALLOCATION_FRACTION = 0.2


class BacktestEngine:
    def __init__(
        self,
        *,
        portfolio: Portfolio,
        strategy: Strategy,
        bars: Sequence[PriceBar],
        symbol: str | None = None,
        allocation_fraction: float = DEFAULT_ALLOCATION_FRACTION,
    ) -> None:
        if not 0.0 < float(allocation_fraction) <= 1.0:
            raise ConfigError(f"allocation_fraction must be in (0, 1], got {allocation_fraction!r}")
        self.portfolio = portfolio
        self.strategy = strategy
        self.bars = tuple(bars)
        if symbol is not None and symbol != strategy.symbol:
            raise ConfigError(f"engine symbol {symbol!r} does not match strategy symbol {strategy.symbol!r}")
        self.symbol = strategy.symbol
        self.allocation_fraction = float(allocation_fraction)
        self._history: list[EquityPoint] = []

    @property
    def equity_history(self) -> tuple[EquityPoint, ...]:
        return tuple(self._history)

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self.portfolio.trades

    def reset(self) -> None:
        self.portfolio.reset()
        self.strategy.reset()
        self._history.clear()

    def run(self) -> list[EquityPoint]:
        self.reset()
        logger.info(
            "backtest start: symbol=%s strategy=%s bars=%d cash=%.2f",
            self.symbol,
            self.strategy.name,
            len(self.bars),
            self.portfolio.cash_balance(),
        )

        view = self.portfolio.view()
        for bar in self.bars:
            signal = self.strategy.on_bar(bar, view)
            self._execute(signal, bar)
            equity = self.portfolio.total_value({self.symbol: bar.close})
            self._history.append(EquityPoint(timestamp=bar.timestamp, equity=equity))

        logger.info(
            "backtest done: symbol=%s trades=%d final_equity=%s",
            self.symbol,
            len(self.portfolio.trades),
            f"{self._history[-1].equity:.2f}" if self._history else "n/a",
        )
        return list(self._history)

    def _execute(self, signal: Signal, bar: PriceBar) -> None:
        if signal.action is SignalAction.BUY:
            if not bar.close > 0:
                return
            cash = self.portfolio.cash_balance()
            quantity = math.floor(cash * self.allocation_fraction * signal.confidence / bar.close)
            if quantity <= 0:
                return
            if self.portfolio.buy(self.symbol, quantity, bar.close, timestamp=bar.timestamp):
                logger.debug("BUY %s x%d @ %.4f (%s)", self.symbol, quantity, bar.close, signal.reason)

        elif signal.action is SignalAction.SELL:
            pos = self.portfolio.position(self.symbol)
            if pos is None:
                return
            if self.portfolio.sell(self.symbol, pos.shares, bar.close, timestamp=bar.timestamp):
                logger.debug("SELL %s x%s @ %.4f (%s)", self.symbol, pos.shares, bar.close, signal.reason)

    def final_return(self) -> float:
        return final_return(equity_array(self._history))

    def max_drawdown(self) -> Drawdown:
        return max_drawdown(equity_array(self._history))

    def win_loss_count(self) -> WinLoss:
        return win_loss_count(self.portfolio.trades)

    def result(self, *, periods_per_year: int = 252) -> BacktestResult:
        """Assemble the result record from the current history and trade log."""

        equity = equity_array(self._history)
        initial = self.portfolio.initial_cash
        final_value = float(equity[-1]) if equity.size else initial
        total_return = final_value - initial
        dd = max_drawdown(equity)
        wl = win_loss_count(self.portfolio.trades)

        return BacktestResult(
            symbol=self.symbol,
            strategy=self.strategy.name,
            start_date=self._history[0].timestamp if self._history else None,
            end_date=self._history[-1].timestamp if self._history else None,
            initial_capital=initial,
            final_value=final_value,
            total_return=total_return,
            total_return_percent=(total_return / initial * 100.0) if initial else 0.0,
            trade_count=len(self.portfolio.trades),
            winning_trades=wl.wins,
            losing_trades=wl.losses,
            win_rate=wl.win_rate,
            max_drawdown=dd.absolute,
            max_drawdown_percent=dd.percent,
            sharpe_ratio=sharpe_ratio(equity, periods_per_year=periods_per_year),
            equity_curve=[EquityPointModel(timestamp=p.timestamp, equity=p.equity) for p in self._history],
        )
