"""strategy_engine: bar-by-bar backtesting core.

Replays a price series through a strategy, fills orders against a cash ledger,
and records the equity curve. Everything around it (HTTP, storage, queues) is
somebody else's problem.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
