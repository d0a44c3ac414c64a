"""
Journal module.

Prices trades into journal entries, validates form input and reads
AI-extracted trade details.
"""

from .entry import (
    JournalEntry,
    PricedTrade,
    Mood,
    STRATEGY_OPTIONS,
    MISTAKE_OPTIONS,
    price_trade,
    record_trade,
)
from .validation import TradeValidationError, validate_trade_input, ensure_valid_trade_input
from .extract import TradeExtract, TradeExtractError, parse_trade_extract, EXTRACT_PROMPT

__all__ = [
    'JournalEntry',
    'PricedTrade',
    'Mood',
    'STRATEGY_OPTIONS',
    'MISTAKE_OPTIONS',
    'price_trade',
    'record_trade',
    'TradeValidationError',
    'validate_trade_input',
    'ensure_valid_trade_input',
    'TradeExtract',
    'TradeExtractError',
    'parse_trade_extract',
    'EXTRACT_PROMPT',
]
