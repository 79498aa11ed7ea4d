"""strategy_engine.core.exceptions

Errors are part of the interface.

Trading operations reject with ``False``/``None``. Exceptions are reserved for
configuration that should never have reached the hot loop.
"""

from __future__ import annotations


class StrategyEngineError(Exception):
    """Base exception for strategy_engine."""


class ConfigError(StrategyEngineError):
    """Configuration is missing, invalid, or inconsistent."""
