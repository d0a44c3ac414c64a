"""
Gross and net P&L for a round-trip trade.

Turnover values are carried at full precision; only net P&L is rounded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .calculator import ChargeBreakdown, round_paisa


class TradeDirection(str, Enum):
    """Which leg came first."""
    BUY = "BUY"    # long: bought first, sold later
    SELL = "SELL"  # short: sold first, bought later


@dataclass(frozen=True)
class Turnover:
    """Buy, sell and total transaction values."""
    buy_value: float
    sell_value: float
    turnover: float


def compute_turnover(entry_price: float,
                     exit_price: float,
                     quantity: float,
                     lot_size: float = 1) -> Turnover:
    """Buy value is entry x units, sell value is exit x units, whatever the direction."""
    total_quantity = quantity * lot_size
    buy_value = entry_price * total_quantity
    sell_value = exit_price * total_quantity
    return Turnover(
        buy_value=buy_value,
        sell_value=sell_value,
        turnover=buy_value + sell_value,
    )


def compute_gross_pnl(entry_price: float,
                      exit_price: float,
                      quantity: float,
                      lot_size: float = 1,
                      direction: Union[TradeDirection, str] = TradeDirection.BUY) -> float:
    """
    Gross P&L before charges.

    A short (anything other than BUY) profits when the price falls.
    """
    total_quantity = quantity * lot_size

    if direction == TradeDirection.BUY:
        return (exit_price - entry_price) * total_quantity
    return (entry_price - exit_price) * total_quantity


def compute_net_pnl(gross_pnl: float, charges: ChargeBreakdown) -> float:
    """Net P&L after all charges, rounded to the paisa."""
    return round_paisa(gross_pnl - charges.total)


@dataclass(frozen=True)
class TradeEconomics:
    """Prices, size and direction of a round-trip trade."""

    entry_price: float
    exit_price: float
    quantity: float
    lot_size: float = 1
    direction: Union[TradeDirection, str] = TradeDirection.BUY

    @property
    def total_quantity(self) -> float:
        return self.quantity * self.lot_size

    @property
    def values(self) -> Turnover:
        return compute_turnover(self.entry_price, self.exit_price,
                                self.quantity, self.lot_size)

    @property
    def buy_value(self) -> float:
        return self.values.buy_value

    @property
    def sell_value(self) -> float:
        return self.values.sell_value

    @property
    def turnover(self) -> float:
        return self.values.turnover

    @property
    def gross_pnl(self) -> float:
        return compute_gross_pnl(self.entry_price, self.exit_price,
                                 self.quantity, self.lot_size, self.direction)
