"""
Analytics module.

Aggregates journal entries into leakage, daily and strategy reports.
"""

from .leakage import (
    LeakageReport,
    trades_frame,
    filter_recent,
    leakage_report,
    daily_pnl,
    strategy_stats,
)

__all__ = [
    'LeakageReport',
    'trades_frame',
    'filter_recent',
    'leakage_report',
    'daily_pnl',
    'strategy_stats',
]
