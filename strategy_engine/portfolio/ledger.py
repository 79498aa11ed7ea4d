"""strategy_engine.portfolio.ledger

Cash + positions + trade log for one backtest.

Invariants (after every call):
- cash >= 0 (no margin; buys that would overdraw are rejected)
- every stored position has shares > 0; a position sold down to exactly zero
  is removed
- the trade log is append-only

Rejected operations return False/None and leave state untouched. Nothing here
raises on bad market input.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.time import utc_now
from strategy_engine.portfolio.types import Position, PositionSide, Trade, TradeKind

logger = logging.getLogger(__name__)


def _valid_order(symbol: str, shares: float, price: float) -> str | None:
    if not isinstance(symbol, str) or not symbol.strip():
        return "empty symbol"
    if not shares > 0:
        return f"non-positive shares {shares!r}"
    if not price > 0:
        return f"non-positive price {price!r}"
    return None


class Portfolio:
    """Mutable ledger. Only the backtest engine should call ``buy``/``sell``."""

    def __init__(self, initial_cash: float) -> None:
        if not float(initial_cash) >= 0:
            raise ConfigError(f"initial_cash must be >= 0, got {initial_cash!r}")
        self._initial_cash = float(initial_cash)
        self._cash = self._initial_cash
        self._positions: dict[str, Position] = {}
        self._trades: list[Trade] = []

    @property
    def initial_cash(self) -> float:
        return self._initial_cash

    @property
    def trades(self) -> tuple[Trade, ...]:
        return tuple(self._trades)

    def cash_balance(self) -> float:
        return self._cash

    def position(self, symbol: str) -> Position | None:
        return self._positions.get(symbol)

    def all_positions(self) -> dict[str, Position]:
        return dict(self._positions)

    def buy(self, symbol: str, shares: float, price: float, *, timestamp: datetime | None = None) -> bool:
        problem = _valid_order(symbol, shares, price)
        if problem is None and self._cash < shares * price:
            problem = f"insufficient cash {self._cash:.2f} < {shares * price:.2f}"
        if problem is not None:
            logger.debug("buy rejected: %s %s@%s (%s)", symbol, shares, price, problem)
            return False

        cost = shares * price
        existing = self._positions.get(symbol)
        if existing is None:
            self._positions[symbol] = Position(symbol=symbol, shares=shares, average_cost=price, side=PositionSide.LONG)
        else:
            total = existing.shares + shares
            avg = (existing.average_cost * existing.shares + price * shares) / total
            self._positions[symbol] = replace(existing, shares=total, average_cost=avg)

        self._cash -= cost
        self._trades.append(
            Trade(symbol=symbol, shares=shares, price=price, kind=TradeKind.BUY, timestamp=timestamp or utc_now())
        )
        return True

    def sell(self, symbol: str, shares: float, price: float, *, timestamp: datetime | None = None) -> bool:
        problem = _valid_order(symbol, shares, price)
        existing = self._positions.get(symbol) if problem is None else None
        if problem is None:
            if existing is None:
                problem = "no open position"
            elif shares > existing.shares:
                problem = f"only {existing.shares} shares held"
        if problem is not None or existing is None:
            logger.debug("sell rejected: %s %s@%s (%s)", symbol, shares, price, problem)
            return False

        remaining = existing.shares - shares
        if remaining == 0:
            del self._positions[symbol]
        else:
            # Cost basis is untouched by a sell.
            self._positions[symbol] = replace(existing, shares=remaining)

        self._cash += shares * price
        self._trades.append(
            Trade(symbol=symbol, shares=shares, price=price, kind=TradeKind.SELL, timestamp=timestamp or utc_now())
        )
        return True

    def total_value(self, current_prices: Mapping[str, float]) -> float:
        """Cash plus marked positions.

        Callers must price every held symbol; a missing price contributes 0.
        """

        total = self._cash
        for sym, pos in self._positions.items():
            px = current_prices.get(sym)
            if px is None:
                logger.warning("no price for held symbol %s; valued at 0", sym)
                continue
            total += pos.market_value(px)
        return total

    def unrealized_pnl(self, symbol: str, current_price: float) -> float | None:
        pos = self._positions.get(symbol)
        if pos is None or not current_price > 0:
            return None
        return (float(current_price) - pos.average_cost) * pos.shares

    def realized_pnl(self) -> float:
        """Realized P&L replayed from the trade log at average cost."""

        held: dict[str, tuple[float, float]] = {}  # symbol -> (shares, avg cost)
        realized = 0.0
        for t in self._trades:
            shares, avg = held.get(t.symbol, (0.0, 0.0))
            if t.kind is TradeKind.BUY:
                total = shares + t.shares
                held[t.symbol] = (total, (avg * shares + t.price * t.shares) / total)
            else:
                realized += (t.price - avg) * t.shares
                left = shares - t.shares
                if left == 0:
                    held.pop(t.symbol, None)
                else:
                    held[t.symbol] = (left, avg)
        return realized

    def reset(self) -> None:
        self._cash = self._initial_cash
        self._positions.clear()
        self._trades.clear()

    def view(self) -> PortfolioView:
        return PortfolioView(self)

    def __repr__(self) -> str:
        return f"Portfolio(cash={self._cash:.2f}, positions={len(self._positions)}, trades={len(self._trades)})"


class PortfolioView:
    """Read-only window onto a Portfolio. Handed to strategies."""

    __slots__ = ("_portfolio",)

    def __init__(self, portfolio: Portfolio) -> None:
        self._portfolio = portfolio

    def cash_balance(self) -> float:
        return self._portfolio.cash_balance()

    def position(self, symbol: str) -> Position | None:
        return self._portfolio.position(symbol)

    def all_positions(self) -> dict[str, Position]:
        return self._portfolio.all_positions()

    def total_value(self, current_prices: Mapping[str, float]) -> float:
        return self._portfolio.total_value(current_prices)

    def unrealized_pnl(self, symbol: str, current_price: float) -> float | None:
        return self._portfolio.unrealized_pnl(symbol, current_price)

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self._portfolio.trades
