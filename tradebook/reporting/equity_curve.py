"""
P&L Curve Plotting module.

Generates matplotlib charts of cumulative gross and net P&L, showing how
much of the gross result is lost to charges.
"""

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for file output

import matplotlib.pyplot as plt
import matplotlib.dates as mdates
import numpy as np
import pandas as pd
from typing import Tuple
from pathlib import Path
import logging

from .formatting import format_compact

logger = logging.getLogger(__name__)


class PnLCurveChart:
    """
    Generates cumulative P&L visualizations.

    Features:
    - Cumulative gross and net P&L
    - Shaded charge leakage between the two
    - Daily net P&L bars
    """

    def __init__(self,
                 figsize: Tuple[int, int] = (14, 10),
                 style: str = 'seaborn-v0_8-darkgrid',
                 dpi: int = 150):
        """
        Initialize chart generator.

        Args:
            figsize: Figure size (width, height)
            style: Matplotlib style
            dpi: Output resolution
        """
        self.figsize = figsize
        self.dpi = dpi
        try:
            plt.style.use(style)
        except OSError:
            plt.style.use('default')

    def plot(self,
             daily: pd.DataFrame,
             save_path: str = None,
             title: str = "Cumulative P&L",
             show_daily: bool = True) -> str:
        """
        Plot cumulative gross vs net P&L.

        Args:
            daily: DataFrame from analytics.daily_pnl ('date', 'net_pnl',
                'cumulative_gross', 'cumulative_net' columns)
            save_path: Path to save PNG
            title: Chart title
            show_daily: Show daily net P&L bars subplot

        Returns:
            Path to saved file
        """
        if daily.empty:
            raise ValueError("No daily P&L to plot")

        if show_daily:
            fig, (ax1, ax2) = plt.subplots(2, 1, figsize=self.figsize,
                                           height_ratios=[3, 1],
                                           sharex=True)
        else:
            fig, ax1 = plt.subplots(1, 1, figsize=self.figsize)
            ax2 = None

        dates = pd.to_datetime(daily['date'])
        gross = daily['cumulative_gross'].to_numpy(dtype=float)
        net = daily['cumulative_net'].to_numpy(dtype=float)

        ax1.plot(dates, gross, color='gray', linewidth=1, linestyle='--', label='Gross')
        ax1.plot(dates, net, 'b-', linewidth=1.5, label='Net')
        ax1.fill_between(dates, net, gross, color='red', alpha=0.2, label='Charges')
        ax1.axhline(0, color='black', linewidth=0.5)
        ax1.legend(loc='upper left')

        ax1.set_title(title, fontsize=14, fontweight='bold')
        ax1.set_ylabel('P&L (₹)', fontsize=11)
        ax1.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: format_compact(x)))
        ax1.grid(True, alpha=0.3)

        leakage = gross[-1] - net[-1]
        stats_text = (
            f"Net: {format_compact(net[-1])}\n"
            f"Charges: {format_compact(leakage)}\n"
            f"Peak: {format_compact(np.max(net))}"
        )
        ax1.text(0.02, 0.80, stats_text, transform=ax1.transAxes,
                 fontsize=10, verticalalignment='top',
                 bbox=dict(boxstyle='round', facecolor='white', alpha=0.8))

        if ax2 is not None:
            daily_net = daily['net_pnl'].to_numpy(dtype=float)
            colors = np.where(daily_net >= 0, 'green', 'red')
            ax2.bar(dates, daily_net, color=colors, alpha=0.7)
            ax2.set_ylabel('Daily Net', fontsize=11)
            ax2.set_xlabel('Date', fontsize=11)
            ax2.grid(True, alpha=0.3)

        bottom = ax2 if ax2 is not None else ax1
        bottom.xaxis.set_major_formatter(mdates.DateFormatter('%b %d'))
        plt.setp(bottom.xaxis.get_majorticklabels(), rotation=45, ha='right')

        plt.tight_layout()

        if save_path is None:
            save_path = 'pnl_curve.png'

        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        plt.close(fig)

        logger.info(f"Saved P&L curve to {save_path}")
        return save_path
