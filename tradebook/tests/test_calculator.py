"""
Tests for the trading charge calculator.

Covers:
- Paisa rounding (halves toward +infinity, huge and non-finite values)
- Per-instrument STT and exchange charges
- Shared SEBI / brokerage / GST / stamp duty
- Round-then-sum total
- No-validation behaviour for odd inputs
"""

import dataclasses
import math
from decimal import Decimal

import pytest

from tradebook.charges.calculator import (
    CHARGE_FIELDS,
    CalculationParams,
    ChargeBreakdown,
    Instrument,
    compute_charges,
    round_paisa,
)
from tradebook.charges.rates import RateSchedule


def _params(instrument, buy_value, sell_value, **kwargs):
    return CalculationParams(
        instrument=instrument,
        gross_pnl=sell_value - buy_value,
        turnover=buy_value + sell_value,
        sell_value=sell_value,
        buy_value=buy_value,
        **kwargs,
    )


# ─────────────────────────────────────────────────────────────────
# ROUNDING
# ─────────────────────────────────────────────────────────────────

class TestRoundPaisa:
    @pytest.mark.parametrize("value, expected", [
        (5.15625, 5.16),
        (0.015775, 0.02),
        (1.005, 1.01),
        (2.675, 2.68),
        (8.36075, 8.36),
        (-1.004, -1.0),
        (-1.006, -1.01),
        (40, 40.0),
        (0.0, 0.0),
    ])
    def test_half_up(self, value, expected):
        assert round_paisa(value) == expected

    def test_nan_passes_through(self):
        assert math.isnan(round_paisa(float('nan')))

    def test_infinity_passes_through(self):
        assert round_paisa(float('inf')) == float('inf')

    @pytest.mark.parametrize("value, expected", [
        (-1.005, -1.0),
        (-0.025, -0.02),
        (-0.125, -0.12),
        (-2.675, -2.67),
        (0.125, 0.13),
    ])
    def test_exact_halves_round_toward_positive(self, value, expected):
        assert round_paisa(value) == expected

    @pytest.mark.parametrize("value", [1e26, 1e30, -1e30, 1.7976931348623157e308])
    def test_huge_values_do_not_raise(self, value):
        assert round_paisa(value) == value


# ─────────────────────────────────────────────────────────────────
# OPTIONS SCENARIO
# ─────────────────────────────────────────────────────────────────

class TestOptionsScenario:
    """Bought 50 at 150.50, sold at 165.00, Maharashtra, ₹20 x 2 orders."""

    def test_line_items(self, options_params):
        charges = compute_charges(options_params)
        assert charges.stt == 5.16
        assert charges.exchange_charges == 8.36
        assert charges.sebi_charges == 0.02
        assert charges.brokerage == 40.00
        assert charges.gst == 8.71
        assert charges.stamp_duty == 1.13

    def test_total(self, options_params):
        assert compute_charges(options_params).total == 63.38

    def test_enum_and_string_instrument_agree(self, options_params):
        as_enum = dataclasses.replace(options_params, instrument=Instrument.OPTIONS)
        assert compute_charges(as_enum) == compute_charges(options_params)

    def test_idempotent(self, options_params):
        first = compute_charges(options_params)
        second = compute_charges(options_params)
        assert first == second
        assert first.to_dict() == second.to_dict()


# ─────────────────────────────────────────────────────────────────
# INSTRUMENT BRANCHES
# ─────────────────────────────────────────────────────────────────

class TestInstruments:
    def test_futures(self):
        charges = compute_charges(_params(Instrument.FUTURES, 99_000.0, 100_000.0))
        assert charges.stt == 10.0             # sell side only
        assert charges.exchange_charges == 39.8
        assert charges.sebi_charges == 0.2
        assert charges.gst == 14.4
        assert charges.stamp_duty == 14.85
        assert charges.total == 119.25

    def test_equity_intraday(self):
        charges = compute_charges(_params(Instrument.EQUITY, 50_000.0, 51_000.0))
        assert charges.stt == 12.75
        assert charges.exchange_charges == 35.35
        assert charges.gst == 13.58
        assert charges.stamp_duty == 7.5
        assert charges.total == 109.28

    def test_equity_delivery_taxes_both_sides(self):
        # entry 100, exit 90, 10 shares
        charges = compute_charges(_params(Instrument.EQUITY, 1000.0, 900.0, is_intraday=False))
        assert charges.stt == 1.9

    def test_intraday_flag_ignored_outside_equity(self):
        intraday = compute_charges(_params(Instrument.FUTURES, 1000.0, 1100.0))
        delivery = compute_charges(_params(Instrument.FUTURES, 1000.0, 1100.0, is_intraday=False))
        assert intraday == delivery

    def test_commodities_have_no_stt(self):
        charges = compute_charges(_params(Instrument.COMMODITIES, 50_000.0, 50_000.0))
        assert charges.stt == 0.0
        assert charges.exchange_charges == 26.0

    def test_unknown_instrument_only_shared_charges(self):
        charges = compute_charges(_params("CRYPTO", 0.0, 0.0))
        assert charges.stt == 0.0
        assert charges.exchange_charges == 0.0
        assert charges.brokerage == 40.0
        assert charges.gst == 7.2
        assert charges.total == 47.2


# ─────────────────────────────────────────────────────────────────
# SHARED CHARGES
# ─────────────────────────────────────────────────────────────────

class TestSharedCharges:
    @pytest.fixture
    def rates(self):
        return RateSchedule(stamp_duty={'Maharashtra': 0.0001, 'Other': 0.0003})

    def test_brokerage_per_order(self):
        charges = compute_charges(_params(Instrument.OPTIONS, 100.0, 100.0,
                                          brokerage_per_order=15, number_of_orders=3))
        assert charges.brokerage == 45.0

    def test_zero_brokerage(self):
        charges = compute_charges(_params(Instrument.OPTIONS, 100.0, 100.0,
                                          brokerage_per_order=0))
        assert charges.brokerage == 0.0

    def test_known_state(self, rates):
        charges = compute_charges(_params(Instrument.EQUITY, 10_000.0, 10_000.0,
                                          state='Maharashtra'), rates)
        assert charges.stamp_duty == 1.0

    def test_unknown_state_uses_other_rate(self, rates):
        charges = compute_charges(_params(Instrument.EQUITY, 10_000.0, 10_000.0,
                                          state='Atlantis'), rates)
        assert charges.stamp_duty == 3.0

    def test_omitted_state_uses_other_rate(self, rates):
        charges = compute_charges(_params(Instrument.EQUITY, 10_000.0, 10_000.0), rates)
        assert charges.stamp_duty == 3.0

    def test_stamp_duty_only_on_buy_value(self, rates):
        charges = compute_charges(_params(Instrument.EQUITY, 0.0, 10_000.0), rates)
        assert charges.stamp_duty == 0.0

    def test_gst_excludes_stt_and_stamp_duty(self, rates):
        low = compute_charges(_params(Instrument.EQUITY, 10_000.0, 10_000.0,
                                      state='Maharashtra'), rates)
        high = compute_charges(_params(Instrument.EQUITY, 10_000.0, 10_000.0,
                                       state='Atlantis', is_intraday=False), rates)
        assert high.stamp_duty > low.stamp_duty
        assert high.stt > low.stt
        assert high.gst == low.gst


# ─────────────────────────────────────────────────────────────────
# TOTAL INVARIANT
# ─────────────────────────────────────────────────────────────────

class TestTotal:
    @pytest.mark.parametrize("instrument, buy, sell, intraday", [
        (Instrument.OPTIONS, 7525.0, 8250.0, True),
        (Instrument.OPTIONS, 12.35, 0.05, True),
        (Instrument.FUTURES, 1_234_567.89, 1_250_000.01, True),
        (Instrument.EQUITY, 333.33, 333.34, True),
        (Instrument.EQUITY, 98_765.43, 87_654.32, False),
        (Instrument.COMMODITIES, 5_555.55, 6_666.66, True),
        ("UNKNOWN", 1.0, 2.0, True),
    ])
    def test_total_is_sum_of_rounded_fields(self, instrument, buy, sell, intraday):
        charges = compute_charges(_params(instrument, buy, sell, is_intraday=intraday))
        exact = sum(Decimal(str(charges.components()[name])) for name in CHARGE_FIELDS)
        assert Decimal(str(charges.total)) == exact

    def test_rounds_before_summing(self):
        # Raw sum 0.012 would round to 0.01; each item rounds to 0.00 first.
        charges = ChargeBreakdown.from_components(
            stt=0.004, exchange_charges=0.004, gst=0.004,
            stamp_duty=0.0, sebi_charges=0.0, brokerage=0.0,
        )
        assert charges.stt == 0.0
        assert charges.total == 0.0

    def test_components_exclude_total(self, options_params):
        components = compute_charges(options_params).components()
        assert tuple(components) == CHARGE_FIELDS

    def test_breakdown_is_frozen(self, options_params):
        charges = compute_charges(options_params)
        with pytest.raises(dataclasses.FrozenInstanceError):
            charges.total = 0.0  # type: ignore

    def test_from_dict_keeps_stored_values(self, options_params):
        charges = compute_charges(options_params)
        assert ChargeBreakdown.from_dict(charges.to_dict()) == charges


# ─────────────────────────────────────────────────────────────────
# NO VALIDATION
# ─────────────────────────────────────────────────────────────────

class TestNoValidation:
    def test_zero_trade(self):
        charges = compute_charges(_params(Instrument.OPTIONS, 0.0, 0.0))
        assert charges.total == 47.2

    def test_negative_values_do_not_raise(self):
        charges = compute_charges(_params(Instrument.EQUITY, -1000.0, -900.0))
        assert charges.stt < 0
        assert charges.stamp_duty < 0

    def test_nan_propagates(self):
        charges = compute_charges(_params(Instrument.EQUITY, float('nan'), 1000.0))
        assert math.isnan(charges.stamp_duty)
        assert math.isnan(charges.total)
        assert charges.brokerage == 40.0

    def test_huge_values_do_not_raise(self):
        charges = compute_charges(CalculationParams("OPTIONS", 0.0, 2e30, 1e30, 1e30))
        assert math.isfinite(charges.total)
        assert charges.stt == pytest.approx(6.25e26)
        assert charges.total == pytest.approx(sum(charges.components().values()))
