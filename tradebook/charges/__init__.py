"""
Charges module.

Provides:
- Immutable Indian market rate schedule
- Charge calculator (STT, exchange, GST, stamp duty, SEBI, brokerage)
- Gross / net P&L derivation
"""

from .rates import RateSchedule, STTRates, ExchangeRates, TAX_RATES, FALLBACK_STATE
from .calculator import (
    Instrument,
    CalculationParams,
    ChargeBreakdown,
    CHARGE_FIELDS,
    compute_charges,
    round_paisa,
)
from .pnl import (
    TradeDirection,
    TradeEconomics,
    Turnover,
    compute_turnover,
    compute_gross_pnl,
    compute_net_pnl,
)

__all__ = [
    'RateSchedule',
    'STTRates',
    'ExchangeRates',
    'TAX_RATES',
    'FALLBACK_STATE',
    'Instrument',
    'CalculationParams',
    'ChargeBreakdown',
    'CHARGE_FIELDS',
    'compute_charges',
    'round_paisa',
    'TradeDirection',
    'TradeEconomics',
    'Turnover',
    'compute_turnover',
    'compute_gross_pnl',
    'compute_net_pnl',
]
