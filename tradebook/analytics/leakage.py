"""
Journal analytics.

Aggregates journal entries into:
- Charge leakage report (how much gross profit went to charges)
- Daily P&L with cumulative gross / net curves
- Per-strategy statistics
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import logging

import pandas as pd

from ..charges.calculator import CHARGE_FIELDS
from ..journal.entry import JournalEntry

logger = logging.getLogger(__name__)

DAILY_COLUMNS = [
    'date', 'gross_pnl', 'net_pnl', 'trade_count', 'win_count', 'loss_count',
    'cumulative_gross', 'cumulative_net',
]

STRATEGY_COLUMNS = [
    'strategy', 'total_trades', 'win_count', 'loss_count', 'win_rate',
    'total_gross_pnl', 'total_net_pnl', 'average_pnl',
]


@dataclass
class LeakageReport:
    """Charges paid relative to gross profit."""
    total_gross_profit: float = 0.0
    total_taxes_paid: float = 0.0
    leakage_percentage: float = 0.0
    breakdown: Dict[str, float] = field(
        default_factory=lambda: {name: 0.0 for name in CHARGE_FIELDS}
    )

    def to_dict(self) -> Dict:
        return {
            'total_gross_profit': self.total_gross_profit,
            'total_taxes_paid': self.total_taxes_paid,
            'leakage_percentage': self.leakage_percentage,
            'breakdown': dict(self.breakdown),
        }


def trades_frame(entries: List[JournalEntry]) -> pd.DataFrame:
    """One row per entry with P&L and flattened charge columns."""
    rows = []
    for entry in entries:
        row = {
            'trade_id': entry.trade_id,
            'date': entry.date,
            'symbol': entry.symbol,
            'strategy': entry.strategy,
            'gross_pnl': entry.gross_pnl,
            'net_pnl': entry.net_pnl,
        }
        row.update(entry.charges.components())
        rows.append(row)

    columns = ['trade_id', 'date', 'symbol', 'strategy', 'gross_pnl', 'net_pnl',
               *CHARGE_FIELDS]
    return pd.DataFrame(rows, columns=columns)


def filter_recent(entries: List[JournalEntry],
                  days: int,
                  now: Optional[datetime] = None) -> List[JournalEntry]:
    """Entries dated within the last `days` days."""
    cutoff = (now or datetime.now()) - timedelta(days=days)
    return [e for e in entries if e.date >= cutoff]


def leakage_report(entries: List[JournalEntry]) -> LeakageReport:
    """
    Summarise charges paid across trades.

    Gross profit counts winning gross P&L only, so leakage is the share of
    the money made that went to taxes and fees.
    """
    df = trades_frame(entries)
    if df.empty:
        return LeakageReport()

    total_gross = float(df.loc[df['gross_pnl'] > 0, 'gross_pnl'].sum())
    breakdown = {name: float(df[name].sum()) for name in CHARGE_FIELDS}
    total_taxes = sum(breakdown.values())

    return LeakageReport(
        total_gross_profit=total_gross,
        total_taxes_paid=total_taxes,
        leakage_percentage=(total_taxes / total_gross) * 100 if total_gross > 0 else 0.0,
        breakdown=breakdown,
    )


def daily_pnl(entries: List[JournalEntry]) -> pd.DataFrame:
    """Per-day P&L, sorted by date, with running totals."""
    df = trades_frame(entries)
    if df.empty:
        return pd.DataFrame(columns=DAILY_COLUMNS)

    df['date'] = pd.to_datetime(df['date']).dt.normalize()
    df['is_win'] = df['net_pnl'] > 0
    df['is_loss'] = df['net_pnl'] < 0

    daily = df.groupby('date', sort=True).agg(
        gross_pnl=('gross_pnl', 'sum'),
        net_pnl=('net_pnl', 'sum'),
        trade_count=('trade_id', 'count'),
        win_count=('is_win', 'sum'),
        loss_count=('is_loss', 'sum'),
    ).reset_index()

    daily['win_count'] = daily['win_count'].astype(int)
    daily['loss_count'] = daily['loss_count'].astype(int)
    daily['cumulative_gross'] = daily['gross_pnl'].cumsum()
    daily['cumulative_net'] = daily['net_pnl'].cumsum()
    return daily[DAILY_COLUMNS]


def strategy_stats(entries: List[JournalEntry]) -> pd.DataFrame:
    """Per-strategy performance, best total net P&L first."""
    df = trades_frame(entries)
    if df.empty:
        return pd.DataFrame(columns=STRATEGY_COLUMNS)

    df['is_win'] = df['net_pnl'] > 0
    df['is_loss'] = df['net_pnl'] < 0

    stats = df.groupby('strategy', sort=False).agg(
        total_trades=('trade_id', 'count'),
        win_count=('is_win', 'sum'),
        loss_count=('is_loss', 'sum'),
        total_gross_pnl=('gross_pnl', 'sum'),
        total_net_pnl=('net_pnl', 'sum'),
    ).reset_index()

    stats['win_count'] = stats['win_count'].astype(int)
    stats['loss_count'] = stats['loss_count'].astype(int)
    stats['win_rate'] = stats['win_count'] / stats['total_trades'] * 100
    stats['average_pnl'] = stats['total_net_pnl'] / stats['total_trades']

    stats = stats.sort_values('total_net_pnl', ascending=False, kind='stable')
    logger.debug(f"Computed stats for {len(stats)} strategies")
    return stats[STRATEGY_COLUMNS].reset_index(drop=True)
