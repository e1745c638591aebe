"""
Replay engine: run recorded prices through the grid engine offline.
"""

from backtest.runner import ReplayResult, read_prices, run_replay

__all__ = ["ReplayResult", "read_prices", "run_replay"]
