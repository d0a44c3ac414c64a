"""
Tradebook Command Line Interface.

Price trades, keep a JSON journal and report charge leakage.
"""

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from tradebook.config import Config, load_config
from tradebook.charges.calculator import CHARGE_FIELDS, Instrument
from tradebook.charges.pnl import TradeDirection, TradeEconomics
from tradebook.charges.rates import TAX_RATES
from tradebook.journal.entry import JournalEntry, Mood, price_trade, record_trade
from tradebook.journal.extract import EXTRACT_PROMPT, TradeExtractError, parse_trade_extract
from tradebook.journal.validation import TradeValidationError, ensure_valid_trade_input
from tradebook.analytics.leakage import (
    daily_pnl,
    filter_recent,
    leakage_report,
    strategy_stats,
)
from tradebook.reporting.formatting import format_compact, format_currency, format_rate

CHARGE_LABELS = {
    'stt': 'STT',
    'exchange_charges': 'Exchange Charges',
    'gst': 'GST',
    'stamp_duty': 'Stamp Duty',
    'sebi_charges': 'SEBI Charges',
    'brokerage': 'Brokerage',
}


def _setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _get_config(ctx) -> Config:
    """Load .env and config, then configure logging."""
    load_dotenv()
    config = load_config(ctx.obj.get("config_path"))
    _setup_logging(config.system.log_level)
    for issue in config.validate():
        logging.getLogger(__name__).warning(issue)
    return config


def _print_json(data, indent=2):
    """Pretty print JSON data."""
    click.echo(json.dumps(data, indent=indent, default=str))


def _print_table(title, rows, headers):
    """Print a table."""
    table = Table(title=title)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*[str(v) for v in row])
    Console().print(table)


def _load_journal(path: Path):
    if not path.exists():
        return []
    with open(path) as f:
        return [JournalEntry.from_dict(d) for d in json.load(f)]


def _save_journal(path: Path, entries):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump([e.to_dict() for e in entries], f, indent=2)


def _charge_config(config: Config, state, brokerage, orders):
    """Apply command line overrides to the configured preferences."""
    charges = config.charges
    if state is not None:
        charges.default_stamp_duty_state = state
    if brokerage is not None:
        charges.brokerage_per_order = brokerage
    if orders is not None:
        charges.number_of_orders = orders
    return charges


def _validate(**kwargs):
    try:
        ensure_valid_trade_input(**kwargs)
    except TradeValidationError as e:
        raise click.UsageError(str(e))


# ─────────────────────────────────────────────────────────────────
# CLI GROUP
# ─────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", default=None, help="Path to config YAML")
@click.pass_context
def cli(ctx, config):
    """Tradebook - trading journal with Indian market charges"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


_instrument_option = click.option(
    "--instrument", default="OPTIONS", show_default=True,
    type=click.Choice([i.value for i in Instrument], case_sensitive=False),
)
_direction_option = click.option(
    "--direction", default="BUY", show_default=True,
    type=click.Choice([d.value for d in TradeDirection], case_sensitive=False),
    help="BUY = bought first (long), SELL = sold first (short)",
)


def _trade_options(func):
    """Shared price / size / preference options."""
    options = [
        _instrument_option,
        _direction_option,
        click.option("--entry", "entry_price", type=float, required=True, help="Entry price"),
        click.option("--exit", "exit_price", type=float, required=True, help="Exit price"),
        click.option("--quantity", type=float, required=True, help="Quantity (lots for F&O)"),
        click.option("--lot-size", type=float, default=1, show_default=True),
        click.option("--delivery", is_flag=True, help="Equity delivery instead of intraday"),
        click.option("--state", default=None, help="Stamp duty state"),
        click.option("--brokerage", type=float, default=None, help="Brokerage per order"),
        click.option("--orders", type=int, default=None, help="Number of orders"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# ─────────────────────────────────────────────────────────────────
# CHARGE COMMANDS
# ─────────────────────────────────────────────────────────────────

@cli.command()
@_trade_options
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def charges(ctx, instrument, direction, entry_price, exit_price, quantity, lot_size,
            delivery, state, brokerage, orders, as_json):
    """Compute charges and net P&L for a round-trip trade."""
    config = _get_config(ctx)
    _validate(symbol=None, entry_price=entry_price, exit_price=exit_price,
              quantity=quantity, lot_size=lot_size, require_symbol=False)

    economics = TradeEconomics(
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        lot_size=lot_size,
        direction=TradeDirection(direction.upper()),
    )
    priced = price_trade(
        economics,
        Instrument(instrument.upper()),
        is_intraday=not delivery,
        charge_config=_charge_config(config, state, brokerage, orders),
    )

    if as_json:
        _print_json({
            'gross_pnl': priced.gross_pnl,
            'buy_value': priced.values.buy_value,
            'sell_value': priced.values.sell_value,
            'turnover': priced.values.turnover,
            'charges': priced.charges.to_dict(),
            'net_pnl': priced.net_pnl,
        })
        return

    rows = [("Gross P&L", format_currency(priced.gross_pnl))]
    rows += [(CHARGE_LABELS[name], format_currency(value))
             for name, value in priced.charges.components().items()]
    rows.append(("Total Charges", format_currency(priced.charges.total)))
    rows.append(("Net P&L", format_currency(priced.net_pnl)))
    _print_table(f"{instrument.upper()} {direction.upper()} "
                 f"(turnover {format_compact(priced.values.turnover)})",
                 rows, ["Item", "Amount"])


@cli.command()
def rates():
    """Show the current tax and charge rates."""
    rows = [(name, format_rate(rate)) for name, rate in TAX_RATES.iter_rates()]
    _print_table("Current Tax Rates", rows, ["Rate", "Value"])


# ─────────────────────────────────────────────────────────────────
# JOURNAL COMMANDS
# ─────────────────────────────────────────────────────────────────

@cli.command()
@click.option("--journal", "journal_path", default="journal.json", show_default=True,
              type=click.Path(dir_okay=False, path_type=Path))
@click.option("--symbol", required=True)
@_trade_options
@click.option("--strategy", default="Other", show_default=True)
@click.option("--mistake", "mistakes", multiple=True, help="Mistake tag (repeatable)")
@click.option("--mood", default=Mood.NEUTRAL.value, show_default=True,
              type=click.Choice([m.value for m in Mood]))
@click.option("--notes", default="")
@click.pass_context
def record(ctx, journal_path, symbol, instrument, direction, entry_price, exit_price,
           quantity, lot_size, delivery, state, brokerage, orders, strategy, mistakes,
           mood, notes):
    """Record a trade in the JSON journal."""
    config = _get_config(ctx)
    _validate(symbol=symbol, entry_price=entry_price, exit_price=exit_price,
              quantity=quantity, lot_size=lot_size, strategy=strategy,
              require_strategy=True)

    entry = record_trade(
        symbol=symbol,
        instrument=instrument.upper(),
        direction=direction.upper(),
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        lot_size=lot_size,
        strategy=strategy,
        mistakes=list(mistakes),
        mood=Mood(mood),
        notes=notes,
        is_intraday=not delivery,
        charge_config=_charge_config(config, state, brokerage, orders),
    )

    entries = _load_journal(journal_path)
    entries.append(entry)
    _save_journal(journal_path, entries)

    click.echo(f"Recorded {entry.trade_id} {entry.symbol}: "
               f"net {format_currency(entry.net_pnl)} "
               f"(charges {format_currency(entry.charges.total)})")


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--prompt", is_flag=True, help="Print the extraction prompt and exit")
def extract(source, prompt):
    """Parse AI-extracted trade JSON from SOURCE (default stdin)."""
    if prompt:
        click.echo(EXTRACT_PROMPT)
        return
    try:
        parsed = parse_trade_extract(source.read())
    except TradeExtractError as e:
        raise click.ClickException(str(e))
    _print_json(parsed.to_dict())


@cli.command()
@click.option("--journal", "journal_path", default="journal.json", show_default=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--days", type=int, default=None,
              help="Only trades from the last N days (0 = all)")
@click.option("--chart", "chart_path", default=None, help="Save cumulative P&L chart here")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def report(ctx, journal_path, days, chart_path, as_json):
    """Charge leakage and strategy report for the journal."""
    config = _get_config(ctx)
    entries = _load_journal(journal_path)

    if days is None:
        days = config.reporting.default_days
    if days > 0:
        entries = filter_recent(entries, days)

    leakage = leakage_report(entries)
    stats = strategy_stats(entries)

    if chart_path:
        from tradebook.reporting.equity_curve import PnLCurveChart
        daily = daily_pnl(entries)
        if daily.empty:
            click.echo("No trades to chart", err=True)
        else:
            PnLCurveChart(dpi=config.reporting.dpi).plot(daily, save_path=chart_path)

    if as_json:
        _print_json({
            'trades': len(entries),
            'total_gross_pnl': sum(e.gross_pnl for e in entries),
            'total_net_pnl': sum(e.net_pnl for e in entries),
            'leakage': leakage.to_dict(),
            'strategies': stats.to_dict(orient='records'),
        })
        return

    click.echo(f"Trades: {len(entries)}")
    _print_table(
        f"Charge Leakage ({leakage.leakage_percentage:.1f}% of gross profit)",
        [(CHARGE_LABELS[name], format_currency(leakage.breakdown[name]))
         for name in CHARGE_FIELDS]
        + [("Total", format_currency(leakage.total_taxes_paid))],
        ["Charge", "Amount"],
    )
    _print_table(
        "Strategies",
        [(row.strategy, row.total_trades, f"{row.win_rate:.1f}%",
          format_compact(row.total_net_pnl), format_compact(row.average_pnl))
         for row in stats.itertuples()],
        ["Strategy", "Trades", "Win Rate", "Net P&L", "Avg P&L"],
    )


# ─────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────

def main():
    cli(obj={})


if __name__ == "__main__":
    sys.exit(main())
