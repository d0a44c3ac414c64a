"""Shared fixtures for Tradebook tests."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tradebook.charges.calculator import CalculationParams
from tradebook.charges.pnl import TradeDirection, TradeEconomics
from tradebook.config import ChargeConfig
from tradebook.journal.entry import record_trade


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer .env / shell settings out of the tests."""
    for name in ("TRADEBOOK_STAMP_DUTY_STATE",
                 "TRADEBOOK_BROKERAGE_PER_ORDER",
                 "TRADEBOOK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def options_trade():
    """NIFTY option bought at 150.50, sold at 165.00, 50 units."""
    return TradeEconomics(
        entry_price=150.50,
        exit_price=165.00,
        quantity=50,
        lot_size=1,
        direction=TradeDirection.BUY,
    )


@pytest.fixture
def options_params(options_trade):
    return CalculationParams(
        instrument="OPTIONS",
        gross_pnl=options_trade.gross_pnl,
        turnover=options_trade.turnover,
        sell_value=options_trade.sell_value,
        buy_value=options_trade.buy_value,
        state="Maharashtra",
        brokerage_per_order=20,
        number_of_orders=2,
    )


@pytest.fixture
def maharashtra_config():
    return ChargeConfig(
        brokerage_per_order=20.0,
        number_of_orders=2,
        default_stamp_duty_state="Maharashtra",
    )


@pytest.fixture
def journal(maharashtra_config):
    """Four trades over two days and two strategies."""
    day1 = datetime(2024, 3, 4, 10, 30)
    day2 = datetime(2024, 3, 5, 11, 0)
    return [
        record_trade("nifty", "OPTIONS", "BUY", 150.50, 165.00, 50,
                     date=day1, strategy="Breakout", charge_config=maharashtra_config),
        record_trade("banknifty", "OPTIONS", "BUY", 300.0, 280.0, 25,
                     date=day1, strategy="Breakout", charge_config=maharashtra_config),
        record_trade("reliance", "EQUITY", "SELL", 2500.0, 2480.0, 10,
                     date=day2, strategy="Momentum", charge_config=maharashtra_config),
        record_trade("tcs", "FUTURES", "BUY", 3900.0, 3910.0, 1, lot_size=150,
                     date=day2, strategy="Momentum", charge_config=maharashtra_config),
    ]
