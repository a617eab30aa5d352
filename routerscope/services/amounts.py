"""
Amount helpers: big-amount normalisation and decimal scaling for display.

Decoders hand amounts over as native integers, decimal strings or
``{"type": "BigNumber", "hex": "0x..."}`` records (``_hex`` on older
encoders). All three normalise to the same ``int``.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Mapping, Optional

# 2**255: "spend whatever balance the previous step left in the router"
CONTRACT_BALANCE = 1 << 255
CONTRACT_BALANCE_HEX = "0x8000000000000000000000000000000000000000000000000000000000000000"
CONTRACT_BALANCE_LABEL = "CONTRACT_BALANCE (use all available balance from a previous step)"

DISPLAY_FRACTION_DIGITS = 6
FALLBACK_DECIMALS = 18
FALLBACK_UNIT = "tokens"
FEE_DENOMINATOR = Decimal(10_000)

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"0x[0-9a-fA-F]+")


def is_bignumber_record(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if "hex" not in value and "_hex" not in value:
        return False
    return value.get("type", "BigNumber") == "BigNumber"


def record_hex(value: Mapping) -> Optional[str]:
    return value.get("hex") or value.get("_hex")


def is_decimal_string(value: Any) -> bool:
    return isinstance(value, str) and bool(_DECIMAL_RE.fullmatch(value))


def is_contract_balance_hex(value: Any) -> bool:
    return isinstance(value, str) and value.lower() == CONTRACT_BALANCE_HEX


def to_int(value: Any) -> int:
    """Normalise any big-amount encoding to an int.

    Raises:
        ValueError: value is not a recognised amount encoding.
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not amounts")
    if isinstance(value, int):
        return value
    if is_bignumber_record(value):
        hex_value = record_hex(value)
        if not hex_value:
            return 0
        return _parse_hex(hex_value)
    if isinstance(value, str):
        if _DECIMAL_RE.fullmatch(value):
            return int(value)
        if _HEX_RE.fullmatch(value):
            return int(value, 16)
    raise ValueError(f"not an amount: {value!r}")


def _parse_hex(text: str) -> int:
    if not _HEX_RE.fullmatch(text):
        raise ValueError(f"malformed hex amount: {text!r}")
    return int(text, 16)


def is_contract_balance(value: Any) -> bool:
    try:
        return to_int(value) == CONTRACT_BALANCE
    except ValueError:
        return False


def _plain(number: Decimal) -> str:
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def scale_amount(amount: int, decimals: int) -> str:
    """Scale ``amount`` down by ``decimals`` places for display.

    Integer arithmetic only, so 77-digit amounts stay exact. The fraction is
    truncated, not rounded, to DISPLAY_FRACTION_DIGITS and always keeps one
    digit: 10**18 at 18 decimals is ``1.0``.
    """
    sign = "-" if amount < 0 else ""
    whole, remainder = divmod(abs(amount), 10 ** decimals)
    fraction = str(remainder).zfill(decimals) if decimals else ""
    fraction = fraction[:DISPLAY_FRACTION_DIGITS].rstrip("0") or "0"
    return f"{sign}{whole}.{fraction}"


def format_fee_percent(fee: Any) -> Optional[str]:
    """Fee tier in hundredths of a basis point as a percent string, e.g. 3000 -> '0.3'."""

    if fee in (None, "", 0):
        return None
    try:
        raw = to_int(fee)
    except ValueError:
        return None
    if raw == 0:
        return None
    return _plain(Decimal(raw) / FEE_DENOMINATOR)
