"""
Reporting module.

Indian-format number display and P&L charts.
"""

from .formatting import format_currency, format_compact, format_rate
from .equity_curve import PnLCurveChart

__all__ = [
    'format_currency',
    'format_compact',
    'format_rate',
    'PnLCurveChart',
]
