from __future__ import annotations

import pytest

from strategy_engine.core.config import StrategyConfig
from strategy_engine.core.exceptions import ConfigError
from strategy_engine.core.types import SignalAction
from strategy_engine.portfolio import Portfolio
from strategy_engine.strategies import (
    RSIMeanReversionStrategy,
    SMACrossoverStrategy,
    Strategy,
    build_strategy,
    register_strategy,
    registry,
    strategy_from_config,
)
from tests.unit._bars import make_bars

CROSS = [10, 10, 10, 9, 8, 12, 14, 16, 10, 5]


def _drive(strategy, bars, portfolio: Portfolio, fills: bool = True) -> list:
    """Feed bars; optionally fill BUY/SELL 1 share to simulate the engine."""

    out = []
    for bar in bars:
        sig = strategy.on_bar(bar, portfolio.view())
        out.append(sig)
        if not fills:
            continue
        if sig.action is SignalAction.BUY:
            portfolio.buy(strategy.symbol, 1, bar.close, timestamp=bar.timestamp)
        elif sig.action is SignalAction.SELL:
            pos = portfolio.position(strategy.symbol)
            if pos is not None:
                portfolio.sell(strategy.symbol, pos.shares, bar.close, timestamp=bar.timestamp)
    return out


def test_sma_crossover_buys_on_golden_cross_and_sells_on_death_cross() -> None:
    s = SMACrossoverStrategy("X", long_period=3, short_period=2)
    sigs = _drive(s, make_bars(CROSS), Portfolio(1_000.0))
    actions = [sig.action for sig in sigs]

    assert actions[:5] == [SignalAction.HOLD] * 5
    assert sigs[1].reason == "SMA not yet calculated"
    assert actions[5] is SignalAction.BUY
    assert sigs[5].confidence == pytest.approx((10 - 29 / 3) / (29 / 3))
    assert actions[6:8] == [SignalAction.HOLD, SignalAction.HOLD]
    assert actions[8] is SignalAction.SELL


def test_sma_crossover_no_buy_while_holding() -> None:
    s = SMACrossoverStrategy("X", long_period=3, short_period=2)
    p = Portfolio(1_000.0)
    p.buy("X", 1, 10.0)
    sigs = _drive(s, make_bars(CROSS[:6]), p, fills=False)
    assert sigs[5].action is SignalAction.HOLD


def test_sma_crossover_first_ready_bar_initial_state() -> None:
    s = SMACrossoverStrategy("X", long_period=3, short_period=2)
    sigs = _drive(s, make_bars([1, 2, 3]), Portfolio(1_000.0), fills=False)
    assert sigs[2].action is SignalAction.BUY

    s.reset()
    sigs = _drive(s, make_bars([3, 2, 1]), Portfolio(1_000.0), fills=False)
    assert sigs[2].action is SignalAction.HOLD


def test_sma_crossover_no_signal_without_fresh_cross() -> None:
    s = SMACrossoverStrategy("X", long_period=3, short_period=2)
    sigs = _drive(s, make_bars([3, 2, 1, 2, 3, 4, 5, 6]), Portfolio(1_000.0), fills=False)
    buys = [i for i, sig in enumerate(sigs) if sig.action is SignalAction.BUY]
    # short crosses above long once; subsequent bars stay above without a new cross
    assert len(buys) == 1


def test_sma_crossover_reset_replays_identically() -> None:
    s = SMACrossoverStrategy("X", long_period=3, short_period=2)
    first = [(x.action, x.confidence) for x in _drive(s, make_bars(CROSS), Portfolio(1_000.0))]
    s.reset()
    second = [(x.action, x.confidence) for x in _drive(s, make_bars(CROSS), Portfolio(1_000.0))]
    assert first == second


def test_rsi_strategy_warms_up_then_buys_oversold() -> None:
    s = RSIMeanReversionStrategy("X", rsi_period=2, time_stop_bars=2)
    sigs = _drive(s, make_bars([10, 9, 8]), Portfolio(1_000.0), fills=False)
    assert [x.action for x in sigs[:2]] == [SignalAction.HOLD, SignalAction.HOLD]
    assert "warming up" in sigs[0].reason
    assert sigs[2].action is SignalAction.BUY
    assert sigs[2].confidence == pytest.approx(1.0)


def test_rsi_strategy_time_stop_excludes_entry_bar() -> None:
    s = RSIMeanReversionStrategy("X", rsi_period=2, time_stop_bars=2)
    sigs = _drive(s, make_bars([10, 9, 8, 7.5, 7, 6.5]), Portfolio(1_000.0))
    actions = [x.action for x in sigs]
    assert actions[2] is SignalAction.BUY
    assert actions[3] is SignalAction.HOLD  # entry detected, stop armed
    assert actions[4] is SignalAction.HOLD
    assert actions[5] is SignalAction.SELL
    assert sigs[5].reason == "time stop"


def test_rsi_strategy_sells_overbought() -> None:
    s = RSIMeanReversionStrategy("X", rsi_period=2, time_stop_bars=5)
    sigs = _drive(s, make_bars([10, 9, 8, 7.5, 20]), Portfolio(1_000.0))
    assert sigs[4].action is SignalAction.SELL
    assert "overbought" in sigs[4].reason


def test_rsi_strategy_holds_when_not_oversold() -> None:
    s = RSIMeanReversionStrategy("X", rsi_period=2)
    sigs = _drive(s, make_bars([10, 11, 12, 13]), Portfolio(1_000.0), fills=False)
    assert all(x.action is SignalAction.HOLD for x in sigs)


def test_rsi_strategy_reset_clears_time_stop() -> None:
    s = RSIMeanReversionStrategy("X", rsi_period=2, time_stop_bars=2)
    bars = make_bars([10, 9, 8, 7.5, 7, 6.5])
    first = [x.action for x in _drive(s, bars, Portfolio(1_000.0))]
    s.reset()
    second = [x.action for x in _drive(s, bars, Portfolio(1_000.0))]
    assert first == second


def test_strategies_never_mutate_the_ledger() -> None:
    p = Portfolio(1_000.0)
    for s in (SMACrossoverStrategy("X", 3, 2), RSIMeanReversionStrategy("X", rsi_period=2)):
        _drive(s, make_bars(CROSS), p, fills=False)
    assert p.trades == ()
    assert p.cash_balance() == 1_000.0


@pytest.mark.parametrize(
    "factory",
    [
        lambda: SMACrossoverStrategy("X", long_period=5, short_period=5),
        lambda: SMACrossoverStrategy("X", long_period=0, short_period=2),
        lambda: SMACrossoverStrategy(" ", long_period=5, short_period=2),
        lambda: RSIMeanReversionStrategy("X", rsi_period=0),
        lambda: RSIMeanReversionStrategy("X", oversold=70, overbought=30),
        lambda: RSIMeanReversionStrategy("X", time_stop_bars=0),
    ],
)
def test_bad_strategy_config_rejected_at_construction(factory) -> None:
    with pytest.raises(ConfigError):
        factory()


def test_registry_builds_known_kinds() -> None:
    s = build_strategy("rsi_mean_reversion", symbol="X", params={"rsi_period": 7})
    assert isinstance(s, RSIMeanReversionStrategy)
    assert s.rsi_period == 7

    cfg = StrategyConfig(kind="sma_crossover", params={"short_period": 3, "long_period": 8})
    s2 = strategy_from_config(cfg, symbol="Y")
    assert isinstance(s2, SMACrossoverStrategy)
    assert s2.symbol == "Y"


def test_registry_rejects_unknown_kind_and_params() -> None:
    with pytest.raises(ConfigError):
        build_strategy("martingale", symbol="X")
    with pytest.raises(ConfigError):
        build_strategy("sma_crossover", symbol="X", params={"window": 3})


def test_rsi_kind_from_config_uses_its_own_defaults() -> None:
    s = strategy_from_config(StrategyConfig(kind="rsi_mean_reversion"), symbol="X")
    assert isinstance(s, RSIMeanReversionStrategy)
    assert s.rsi_period == 14


class AlwaysHold(Strategy):
    name = "always_hold"

    def on_bar(self, bar, portfolio):
        return self._hold(bar, "idle")

    def reset(self) -> None:
        pass


@pytest.fixture
def isolated_registry(monkeypatch: pytest.MonkeyPatch) -> dict:
    table = dict(registry.STRATEGIES)
    monkeypatch.setattr(registry, "STRATEGIES", table)
    return table


def test_register_strategy_makes_kind_buildable(isolated_registry: dict) -> None:
    register_strategy("always_hold", AlwaysHold)
    register_strategy("always_hold", AlwaysHold)  # same class again is fine

    s = build_strategy("always_hold", symbol="X")
    assert isinstance(s, AlwaysHold)
    bar = make_bars([1.0])[0]
    assert s.on_bar(bar, Portfolio(10.0).view()).action is SignalAction.HOLD


def test_register_strategy_refuses_to_shadow_existing_kind(isolated_registry: dict) -> None:
    with pytest.raises(ConfigError):
        register_strategy("sma_crossover", AlwaysHold)
    assert isolated_registry["sma_crossover"] is SMACrossoverStrategy
