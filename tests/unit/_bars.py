from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import numpy as np

from strategy_engine.core.types import PriceBar

START = datetime(2024, 1, 1, tzinfo=UTC)


def make_bars(closes: Iterable[float], *, start: datetime = START, step: timedelta = timedelta(days=1)) -> list[PriceBar]:
    return [
        PriceBar(timestamp=start + i * step, open=float(c), high=float(c), low=float(c), close=float(c), volume=1_000.0)
        for i, c in enumerate(closes)
    ]


def random_walk(n: int, *, seed: int = 7, start: float = 100.0) -> list[float]:
    rng = np.random.default_rng(seed)
    steps = rng.normal(0.0, 1.0, size=n)
    return [float(x) for x in start + np.cumsum(steps)]
