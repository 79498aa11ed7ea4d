"""strategy_engine.indicators.base

Indicator contract.

Every indicator has two modes that must agree on overlapping output:
- batch: ``compute(bars)`` is a pure function of the series and returns one
  point per bar once the warm-up requirement is met (none before)
- streaming: ``update(bar)`` advances internal state by one bar, O(1)

Batch mode replays the series through a scratch instance with the same
parameters, so both modes run the exact same arithmetic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import PriceBar


def require_period(name: str, value: int) -> int:
    try:
        ok = not isinstance(value, bool) and int(value) == value and int(value) > 0
    except (TypeError, ValueError):
        ok = False
    if not ok:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


@dataclass(slots=True)
class RollingWindow:
    """Fixed-length window with running sums.

    ``total`` and ``total_sq`` always cover exactly the values in ``buffer``.
    """

    period: int
    buffer: deque[float] = field(default_factory=deque)
    total: float = 0.0
    total_sq: float = 0.0

    def push(self, x: float) -> None:
        self.buffer.append(x)
        self.total += x
        self.total_sq += x * x
        if len(self.buffer) > self.period:
            old = self.buffer.popleft()
            self.total -= old
            self.total_sq -= old * old

    @property
    def full(self) -> bool:
        return len(self.buffer) == self.period

    def mean(self) -> float:
        return self.total / self.period

    def variance(self) -> float:
        """Population variance; clamped at 0 against rounding."""

        m = self.mean()
        return max(self.total_sq / self.period - m * m, 0.0)

    def clear(self) -> None:
        self.buffer.clear()
        self.total = 0.0
        self.total_sq = 0.0


class Indicator(ABC):
    name: str = "indicator"

    @abstractmethod
    def update(self, bar: PriceBar) -> Any:
        """Advance by one bar and return the current point."""

    @abstractmethod
    def current_value(self) -> Any:
        """Last streaming value, without advancing."""

    @abstractmethod
    def reset(self) -> None:
        """Drop all state; the instance behaves as newly constructed."""

    @property
    @abstractmethod
    def ready(self) -> bool:
        """True once the warm-up requirement is satisfied."""

    @abstractmethod
    def _fresh(self) -> Indicator:
        """New instance with identical parameters."""

    def compute(self, bars: Iterable[PriceBar]) -> list[Any]:
        scratch = self._fresh()
        out: list[Any] = []
        for bar in bars:
            point = scratch.update(bar)
            if scratch.ready:
                out.append(point)
        return out


def to_array(points: Sequence[Any], attr: str = "value") -> np.ndarray:
    """Project one field of a point sequence into float64, NaN where absent."""

    out = np.full(len(points), np.nan, dtype=np.float64)
    for i, p in enumerate(points):
        v = getattr(p, attr)
        if v is not None:
            out[i] = float(v)
    return out
