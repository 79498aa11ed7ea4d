"""strategy_engine.portfolio

Single-currency cash/positions ledger.
"""

from strategy_engine.portfolio.ledger import Portfolio, PortfolioView
from strategy_engine.portfolio.types import Position, PositionSide, Trade, TradeKind

__all__ = ["Portfolio", "PortfolioView", "Position", "PositionSide", "Trade", "TradeKind"]
