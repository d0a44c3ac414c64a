"""
Trading Charge Calculator.

Computes every charge on a round-trip trade in Indian markets:
- Brokerage (flat per order)
- STT (instrument and side specific)
- Exchange Transaction Charges
- SEBI Turnover Fee
- GST (on brokerage + exchange charges + SEBI fee, not on STT or stamp duty)
- Stamp Duty (state-specific, on buy value)

The calculator performs no validation. Negative, zero or NaN inputs flow
through the arithmetic unchanged.
"""

from dataclasses import dataclass, asdict
from decimal import Context, Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Optional, Union
import logging
import math

from .rates import RateSchedule, TAX_RATES

logger = logging.getLogger(__name__)

PAISA = Decimal("0.01")

# Enough digits for any finite float quantized to paisa
_WIDE = Context(prec=400)

CHARGE_FIELDS = (
    'stt',
    'exchange_charges',
    'gst',
    'stamp_duty',
    'sebi_charges',
    'brokerage',
)


class Instrument(str, Enum):
    """Instrument class; decides the STT and exchange charge basis."""
    EQUITY = "EQUITY"
    FUTURES = "FUTURES"
    OPTIONS = "OPTIONS"
    COMMODITIES = "COMMODITIES"


def round_paisa(value: float) -> float:
    """
    Round to 2 decimal places on the float's shortest repr.

    Exact halves go toward +infinity: 0.125 -> 0.13, -0.125 -> -0.12.
    """
    if not math.isfinite(value):
        return value
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return float(Decimal(str(value)).quantize(PAISA, rounding=rounding, context=_WIDE))


@dataclass(frozen=True)
class ChargeBreakdown:
    """Rounded charges for one round-trip trade."""

    stt: float = 0.0
    exchange_charges: float = 0.0
    gst: float = 0.0
    stamp_duty: float = 0.0
    sebi_charges: float = 0.0
    brokerage: float = 0.0
    total: float = 0.0

    @classmethod
    def from_components(cls,
                        stt: float,
                        exchange_charges: float,
                        gst: float,
                        stamp_duty: float,
                        sebi_charges: float,
                        brokerage: float) -> 'ChargeBreakdown':
        """
        Round each raw charge to the paisa, then total the rounded values.

        The total is the sum of the rounded line items, not the rounded sum
        of the raw charges.
        """
        rounded = {
            'stt': round_paisa(stt),
            'exchange_charges': round_paisa(exchange_charges),
            'gst': round_paisa(gst),
            'stamp_duty': round_paisa(stamp_duty),
            'sebi_charges': round_paisa(sebi_charges),
            'brokerage': round_paisa(brokerage),
        }
        total = round_paisa(sum(rounded[name] for name in CHARGE_FIELDS))
        return cls(total=total, **rounded)

    def components(self) -> Dict[str, float]:
        """The six line items, without the total."""
        return {name: getattr(self, name) for name in CHARGE_FIELDS}

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'ChargeBreakdown':
        """Rebuild a stored breakdown as-is; values are not re-rounded."""
        return cls(
            stt=data.get('stt', 0.0),
            exchange_charges=data.get('exchange_charges', 0.0),
            gst=data.get('gst', 0.0),
            stamp_duty=data.get('stamp_duty', 0.0),
            sebi_charges=data.get('sebi_charges', 0.0),
            brokerage=data.get('brokerage', 0.0),
            total=data.get('total', 0.0),
        )


@dataclass(frozen=True)
class CalculationParams:
    """Trade economics and brokerage preferences fed to the calculator."""

    instrument: Union[Instrument, str]
    gross_pnl: float
    turnover: float          # buy value + sell value
    sell_value: float
    buy_value: float
    is_intraday: bool = True  # equity only
    state: Optional[str] = None
    brokerage_per_order: float = 20.0
    number_of_orders: int = 2  # entry + exit


def _stt_and_exchange(params: CalculationParams, rates: RateSchedule):
    """STT and exchange charges, both depending on the instrument class."""
    instrument = params.instrument

    if instrument == Instrument.OPTIONS:
        stt = params.sell_value * rates.stt.options_sell
        exchange_charges = params.turnover * rates.exchange.nse_options
    elif instrument == Instrument.FUTURES:
        stt = params.sell_value * rates.stt.futures
        exchange_charges = params.turnover * rates.exchange.nse_futures
    elif instrument == Instrument.EQUITY:
        if params.is_intraday:
            stt = params.sell_value * rates.stt.equity_intraday
        else:
            stt = (params.buy_value + params.sell_value) * rates.stt.equity_delivery
        exchange_charges = params.turnover * rates.exchange.nse_equity
    elif instrument == Instrument.COMMODITIES:
        # CTT not modelled
        stt = 0.0
        exchange_charges = params.turnover * rates.exchange.mcx_commodities
    else:
        logger.debug(f"Unknown instrument {instrument!r}: no STT or exchange charges")
        stt = 0.0
        exchange_charges = 0.0

    return stt, exchange_charges


def compute_charges(params: CalculationParams,
                    rates: RateSchedule = TAX_RATES) -> ChargeBreakdown:
    """
    Calculate all trading charges for a round-trip trade.

    Args:
        params: Trade values, instrument and brokerage preferences
        rates: Rate schedule (defaults to the current Indian rates)

    Returns:
        ChargeBreakdown with every line item rounded to the paisa
    """
    stt, exchange_charges = _stt_and_exchange(params, rates)

    sebi_charges = params.turnover * rates.sebi
    brokerage = params.brokerage_per_order * params.number_of_orders

    gst = (brokerage + exchange_charges + sebi_charges) * rates.gst

    stamp_duty = params.buy_value * rates.stamp_duty_rate(params.state)

    return ChargeBreakdown.from_components(
        stt=stt,
        exchange_charges=exchange_charges,
        gst=gst,
        stamp_duty=stamp_duty,
        sebi_charges=sebi_charges,
        brokerage=brokerage,
    )
