"""
Trade input validation.

Sits above the charge calculator, which itself accepts any numbers.
"""

import math
from typing import List, Optional


class TradeValidationError(Exception):
    """Raised when trade input fails validation."""

    def __init__(self, issues: List[str]):
        self.issues = issues
        super().__init__("; ".join(issues))


def _check_positive(name: str, value: Optional[float], issues: List[str]):
    if value is None:
        issues.append(f"{name} is required")
    elif math.isnan(value) or value <= 0:
        issues.append(f"{name} must be positive, got {value}")


def validate_trade_input(symbol: Optional[str],
                         entry_price: Optional[float],
                         exit_price: Optional[float],
                         quantity: Optional[float],
                         lot_size: Optional[float] = 1,
                         strategy: Optional[str] = None,
                         require_symbol: bool = True,
                         require_strategy: bool = False) -> List[str]:
    """Validate form values for a trade. Returns list of issues."""
    issues = []

    if require_symbol and (not symbol or not symbol.strip()):
        issues.append("symbol is required")
    _check_positive("entry_price", entry_price, issues)
    _check_positive("exit_price", exit_price, issues)
    _check_positive("quantity", quantity, issues)
    _check_positive("lot_size", lot_size, issues)
    if require_strategy and not strategy:
        issues.append("strategy is required")

    return issues


def ensure_valid_trade_input(*args, **kwargs):
    """Like validate_trade_input, but raise TradeValidationError on issues."""
    issues = validate_trade_input(*args, **kwargs)
    if issues:
        raise TradeValidationError(issues)
