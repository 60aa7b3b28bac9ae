"""Trade history analysis."""

from bfengine.analysis.base import TradeHistorySource
from bfengine.analysis.history import HistoricalAnalyzer, apply_filter, trades_to_dataframe

__all__ = [
    "TradeHistorySource",
    "HistoricalAnalyzer",
    "trades_to_dataframe",
    "apply_filter",
]
