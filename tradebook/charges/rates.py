"""
Indian Market Rate Schedule.

Regulatory and exchange rates used to price a round-trip trade:
- STT (Securities Transaction Tax)
- Exchange Transaction Charges
- SEBI Turnover Fee
- GST (on brokerage + exchange charges + SEBI fee)
- Stamp Duty (state-specific, buy side only)

All rates are expressed as decimals (0.01 = 1%). The schedule is built once
at import time and cannot be modified afterwards.
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

FALLBACK_STATE = "Other"


@dataclass(frozen=True)
class STTRates:
    """Securities Transaction Tax by instrument and side."""
    options_sell: float = 0.000625     # 0.0625% on sell premium
    futures: float = 0.0001            # 0.01% on sell side
    equity_delivery: float = 0.001     # 0.1% on both buy and sell
    equity_intraday: float = 0.00025   # 0.025% on sell side


@dataclass(frozen=True)
class ExchangeRates:
    """Exchange transaction charges, as a fraction of turnover."""
    nse_options: float = 0.00053       # 0.053%
    nse_futures: float = 0.0002        # 0.02%
    nse_equity: float = 0.00035        # 0.035%
    bse: float = 0.000375              # 0.0375%
    mcx_commodities: float = 0.00026   # approximate MCX charges


def _default_stamp_duty() -> Mapping[str, float]:
    return MappingProxyType({
        'Andhra Pradesh': 0.00015,  # 0.015%
        'Maharashtra': 0.00015,
        'Gujarat': 0.00015,
        'Karnataka': 0.00015,
        'Delhi': 0.00015,
        'Tamil Nadu': 0.00015,
        'Telangana': 0.00015,
        'West Bengal': 0.00015,
        'Rajasthan': 0.00015,
        FALLBACK_STATE: 0.00015,
    })


@dataclass(frozen=True)
class RateSchedule:
    """
    Complete charge schedule for Indian equity and derivatives markets.

    Reference: https://zerodha.com/brokerage-calculator
    """

    stt: STTRates = field(default_factory=STTRates)
    exchange: ExchangeRates = field(default_factory=ExchangeRates)

    # ₹10 per crore = 0.0001%
    sebi: float = 0.000001

    # 18% on brokerage + exchange + SEBI
    gst: float = 0.18

    stamp_duty: Mapping[str, float] = field(default_factory=_default_stamp_duty)

    def __post_init__(self):
        """Freeze the stamp duty table and check every rate is a fraction."""
        if FALLBACK_STATE not in self.stamp_duty:
            raise ValueError(f"Stamp duty table must define '{FALLBACK_STATE}'")
        if not isinstance(self.stamp_duty, MappingProxyType):
            object.__setattr__(self, 'stamp_duty', MappingProxyType(dict(self.stamp_duty)))

        for name, rate in self.iter_rates():
            if not 0 <= rate < 1:
                raise ValueError(f"Rate {name} must be in [0, 1), got {rate}")

    def iter_rates(self) -> Iterator[Tuple[str, float]]:
        """Yield (dotted name, rate) for every rate in the schedule."""
        for table_name in ('stt', 'exchange'):
            table = getattr(self, table_name)
            for f in fields(table):
                yield f"{table_name}.{f.name}", getattr(table, f.name)
        yield 'sebi', self.sebi
        yield 'gst', self.gst
        for state, rate in self.stamp_duty.items():
            yield f"stamp_duty.{state}", rate

    @property
    def states(self) -> List[str]:
        """States with a stamp duty entry, in table order."""
        return list(self.stamp_duty.keys())

    def stamp_duty_rate(self, state: Optional[str] = None) -> float:
        """
        Get the stamp duty rate for a state.

        Unknown or missing states fall back to the 'Other' rate.
        """
        # A 0.0 entry is a real rate; only a missing state falls back
        rate = self.stamp_duty.get(state) if state is not None else None
        if rate is None:
            logger.debug(f"No stamp duty entry for {state!r}, using {FALLBACK_STATE}")
            return self.stamp_duty[FALLBACK_STATE]
        return rate


# Current Tax Rates (as of 2024)
TAX_RATES = RateSchedule()
