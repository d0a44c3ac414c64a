"""
Trade Extract parser.

Reads the JSON an AI assistant returns when asked to pull trade details out
of a broker screenshot. The reply may be wrapped in markdown fences or
surrounded by prose; only fields with usable values are kept.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import json
import math
import logging
import re

from ..charges.calculator import Instrument
from ..charges.pnl import TradeDirection

logger = logging.getLogger(__name__)

EXTRACT_PROMPT = """Extract the following trade details from this screenshot and return ONLY a JSON object (no markdown, no explanation):

{
  "symbol": "The trading symbol (e.g., NIFTY, BANKNIFTY, RELIANCE)",
  "entryPrice": The entry/buy price as a number,
  "exitPrice": The exit/sell price as a number,
  "quantity": The quantity/lots as a number,
  "type": "BUY" or "SELL" (the direction of the trade),
  "instrument": "OPTIONS" or "FUTURES" or "EQUITY"
}

If any field is unclear or not visible, omit it from the JSON. Return ONLY valid JSON."""

_FENCED = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


class TradeExtractError(Exception):
    """Raised when no trade data can be read from the input."""
    pass


@dataclass
class TradeExtract:
    """Fields recovered from an extract. Missing fields stay None."""
    symbol: Optional[str] = None
    entry_price: Optional[float] = None
    exit_price: Optional[float] = None
    quantity: Optional[int] = None
    direction: Optional[TradeDirection] = None
    instrument: Optional[Instrument] = None

    def to_dict(self) -> Dict[str, Any]:
        """Only the fields that were found."""
        d = {k: v for k, v in asdict(self).items() if v is not None}
        if self.direction is not None:
            d['direction'] = self.direction.value
        if self.instrument is not None:
            d['instrument'] = self.instrument.value
        return d


def _strip_wrapping(raw: str) -> str:
    """Remove markdown fences and any text around the JSON object."""
    text = raw.strip()
    if "```" in text:
        match = _FENCED.search(text)
        if match:
            text = match.group(1)
        else:
            text = re.sub(r"```(?:json)?", "", text)

    start_idx = text.find('{')
    end_idx = text.rfind('}')
    if start_idx != -1 and end_idx != -1:
        text = text[start_idx:end_idx + 1]
    return text.strip()


def _number(value: Any) -> Optional[float]:
    """Non-zero numeric value, or None."""
    if isinstance(value, bool) or not value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number == 0 or not math.isfinite(number):
        return None
    return number


def parse_trade_extract(raw: str) -> TradeExtract:
    """
    Parse an AI trade extract.

    Args:
        raw: Reply text containing a JSON object

    Returns:
        TradeExtract with the valid fields set

    Raises:
        TradeExtractError: Invalid JSON or no usable field
    """
    text = _strip_wrapping(raw or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TradeExtractError(f"Invalid JSON format: {e.msg}") from e

    if not isinstance(data, dict):
        raise TradeExtractError("Expected a JSON object")

    extract = TradeExtract()

    symbol = data.get('symbol')
    if symbol and isinstance(symbol, str):
        extract.symbol = symbol.upper()

    extract.entry_price = _number(data.get('entryPrice'))
    extract.exit_price = _number(data.get('exitPrice'))

    # Integer part; anything under one unit is treated as missing
    quantity = _number(data.get('quantity'))
    if quantity is not None and int(quantity) != 0:
        extract.quantity = int(quantity)

    trade_type = data.get('type')
    if isinstance(trade_type, str) and trade_type.upper() in TradeDirection.__members__:
        extract.direction = TradeDirection(trade_type.upper())

    instrument = data.get('instrument')
    if isinstance(instrument, str) and instrument.upper() in Instrument.__members__:
        extract.instrument = Instrument(instrument.upper())

    if not extract.to_dict():
        raise TradeExtractError("No valid trade data found in the JSON")

    logger.debug(f"Parsed trade extract: {extract.to_dict()}")
    return extract
