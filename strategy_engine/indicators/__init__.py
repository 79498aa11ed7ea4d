"""strategy_engine.indicators

Technical indicators with batch and streaming modes.
"""

from strategy_engine.indicators.base import Indicator, RollingWindow, to_array
from strategy_engine.indicators.bollinger import BollingerBands
from strategy_engine.indicators.ema import EMA
from strategy_engine.indicators.macd import MACD
from strategy_engine.indicators.rsi import RSI
from strategy_engine.indicators.sma import SMA

__all__ = [
    "EMA",
    "MACD",
    "RSI",
    "SMA",
    "BollingerBands",
    "Indicator",
    "RollingWindow",
    "to_array",
]
