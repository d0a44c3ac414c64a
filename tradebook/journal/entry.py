"""
Journal Entry with computed charges.

Every recorded trade carries:
- Gross P&L (before charges)
- Full charge breakdown
- Net P&L (after charges)
- Strategy, mistakes and mood for review
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any, Union
import logging
import uuid

from ..charges.calculator import (
    CalculationParams,
    ChargeBreakdown,
    Instrument,
    compute_charges,
)
from ..charges.pnl import TradeDirection, TradeEconomics, Turnover, compute_net_pnl
from ..config import ChargeConfig

logger = logging.getLogger(__name__)


class Mood(Enum):
    """State of mind while trading."""
    CALM = "calm"
    CONFIDENT = "confident"
    NERVOUS = "nervous"
    FEARFUL = "fearful"
    TILTED = "tilted"
    NEUTRAL = "neutral"


STRATEGY_OPTIONS = [
    'Gap Up',
    'Gap Down',
    'Trend Following',
    'Breakout',
    'Breakdown',
    'Scalping',
    'Expiry HeroZero',
    'Range Trading',
    'Momentum',
    'Mean Reversion',
    'News Based',
    'Support/Resistance',
    'Other',
]

MISTAKE_OPTIONS = [
    'Revenge Trading',
    'Over Sizing',
    'No Stop Loss',
    'Early Exit',
    'Late Entry',
    'FOMO',
    'Ignored System',
    'Over Trading',
    'Averaging Down',
    'Wrong Direction',
    'Poor Risk Management',
    'Emotional Decision',
    'Other',
]


@dataclass(frozen=True)
class PricedTrade:
    """Everything the calculator derives for one trade."""
    gross_pnl: float
    values: Turnover
    charges: ChargeBreakdown
    net_pnl: float


def price_trade(economics: TradeEconomics,
                instrument: Union[Instrument, str],
                is_intraday: bool = True,
                charge_config: Optional[ChargeConfig] = None) -> PricedTrade:
    """
    Derive gross P&L, charges and net P&L for a trade.

    Args:
        economics: Prices, size and direction
        instrument: Instrument class
        is_intraday: Equity intraday (True) or delivery (False)
        charge_config: Brokerage and stamp duty preferences

    Returns:
        PricedTrade
    """
    if charge_config is None:
        charge_config = ChargeConfig()

    gross = economics.gross_pnl
    values = economics.values

    charges = compute_charges(CalculationParams(
        instrument=instrument,
        gross_pnl=gross,
        turnover=values.turnover,
        sell_value=values.sell_value,
        buy_value=values.buy_value,
        is_intraday=is_intraday,
        state=charge_config.default_stamp_duty_state,
        brokerage_per_order=charge_config.brokerage_per_order,
        number_of_orders=charge_config.number_of_orders,
    ))

    return PricedTrade(
        gross_pnl=gross,
        values=values,
        charges=charges,
        net_pnl=compute_net_pnl(gross, charges),
    )


@dataclass
class JournalEntry:
    """A single trade in the journal."""

    # Identifiers
    trade_id: str
    date: datetime
    symbol: str

    # Trade details
    instrument: Instrument
    direction: TradeDirection
    entry_price: float
    exit_price: float
    quantity: float
    lot_size: float

    # P&L
    gross_pnl: float
    net_pnl: float
    charges: ChargeBreakdown

    # Psychology & strategy
    strategy: str = ""
    mistakes: List[str] = field(default_factory=list)
    mood: Mood = Mood.NEUTRAL
    notes: str = ""
    is_intraday: bool = True

    @property
    def is_winner(self) -> bool:
        """Check if trade was profitable after charges."""
        return self.net_pnl > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'trade_id': self.trade_id,
            'date': self.date.isoformat(),
            'symbol': self.symbol,
            'instrument': self.instrument.value,
            'direction': self.direction.value,
            'entry_price': self.entry_price,
            'exit_price': self.exit_price,
            'quantity': self.quantity,
            'lot_size': self.lot_size,
            'gross_pnl': self.gross_pnl,
            'net_pnl': self.net_pnl,
            'charges': self.charges.to_dict(),
            'strategy': self.strategy,
            'mistakes': list(self.mistakes),
            'mood': self.mood.value,
            'notes': self.notes,
            'is_intraday': self.is_intraday,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JournalEntry':
        """Rebuild an entry from to_dict() output. Stored P&L is kept as-is."""
        return cls(
            trade_id=data['trade_id'],
            date=datetime.fromisoformat(data['date']),
            symbol=data['symbol'],
            instrument=Instrument(data['instrument']),
            direction=TradeDirection(data['direction']),
            entry_price=data['entry_price'],
            exit_price=data['exit_price'],
            quantity=data['quantity'],
            lot_size=data.get('lot_size', 1),
            gross_pnl=data['gross_pnl'],
            net_pnl=data['net_pnl'],
            charges=ChargeBreakdown.from_dict(data.get('charges', {})),
            strategy=data.get('strategy', ""),
            mistakes=list(data.get('mistakes', [])),
            mood=Mood(data.get('mood', Mood.NEUTRAL.value)),
            notes=data.get('notes', ""),
            is_intraday=data.get('is_intraday', True),
        )


def record_trade(symbol: str,
                 instrument: Union[Instrument, str],
                 direction: Union[TradeDirection, str],
                 entry_price: float,
                 exit_price: float,
                 quantity: float,
                 lot_size: float = 1,
                 date: datetime = None,
                 strategy: str = "",
                 mistakes: List[str] = None,
                 mood: Mood = Mood.NEUTRAL,
                 notes: str = "",
                 is_intraday: bool = True,
                 charge_config: Optional[ChargeConfig] = None) -> JournalEntry:
    """
    Price a trade and build its journal entry.

    No validation happens here; see journal.validation.
    """
    instrument = Instrument(instrument)
    direction = TradeDirection(direction)

    economics = TradeEconomics(
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        lot_size=lot_size,
        direction=direction,
    )
    priced = price_trade(economics, instrument, is_intraday, charge_config)

    entry = JournalEntry(
        trade_id=uuid.uuid4().hex[:8],
        date=date or datetime.now(),
        symbol=symbol.upper(),
        instrument=instrument,
        direction=direction,
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        lot_size=lot_size,
        gross_pnl=priced.gross_pnl,
        net_pnl=priced.net_pnl,
        charges=priced.charges,
        strategy=strategy,
        mistakes=list(mistakes or []),
        mood=mood,
        notes=notes,
        is_intraday=is_intraday,
    )
    logger.debug(
        f"Recorded {entry.symbol} {direction.value}: gross={entry.gross_pnl:.2f} "
        f"charges={entry.charges.total:.2f} net={entry.net_pnl:.2f}"
    )
    return entry
