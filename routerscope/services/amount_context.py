"""
Currency context for amount fields, inferred from their siblings.

A decoded command rarely says which token an amount is denominated in; the
answer sits next to it. ``amountIn`` of a V3 swap is in the first token of the
sibling ``path``, ``amountOutMin`` in the last one, and a ``token`` or
``currency`` field applies to every amount beside it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from .address import is_valid_evm_address
from .value_classifier import ValueKind, classify

_SHARED_FIELDS = ("currency", "token")
_INPUT_FIELDS = ("tokenin", "currencyin")
_OUTPUT_FIELDS = ("tokenout", "currencyout")


def amount_side(name: Any) -> Optional[str]:
    """``"in"`` or ``"out"`` for amount-like field names, None otherwise."""

    lowered = str(name).lower()
    start = lowered.find("amount")
    if start < 0:
        return None
    return "out" if "out" in lowered[start:] else "in"


def _address(value: Any) -> Optional[str]:
    return value if is_valid_evm_address(value) else None


def path_ends(path: Any) -> Tuple[Optional[str], Optional[str]]:
    """First input and last output token of a path value."""

    classified = classify(path)
    hops = classified.value
    if not hops:
        return None, None

    if classified.kind is ValueKind.ADDRESS_PATH:
        return hops[0], hops[-1]
    if classified.kind is ValueKind.FEE_TIER_PATH:
        return _address(hops[0]["tokenIn"]), _address(hops[-1]["tokenOut"])
    if classified.kind is ValueKind.INTERMEDIATE_CURRENCY_PATH:
        # Only the hops are listed, the input currency lives elsewhere
        return None, _address(hops[-1]["intermediateCurrency"])
    return None, None


@dataclass(frozen=True)
class CurrencyContext:
    input: Optional[str] = None
    output: Optional[str] = None

    def for_field(self, name: Any, default: Optional[str] = None) -> Optional[str]:
        """Currency for the field ``name``, or ``default`` when nothing was inferred."""

        side = amount_side(name)
        if side is None:
            return default
        currency = self.output if side == "out" else self.input
        return currency or default


def infer_currency_context(fields: Iterable[Tuple[Any, Any]]) -> CurrencyContext:
    """Scan ``(name, value)`` siblings for the input and output currencies.

    Explicit ``tokenIn``/``tokenOut`` fields win over a shared ``token`` or
    ``currency`` field, which wins over the ends of a ``path``.
    """
    shared = explicit_in = explicit_out = None
    path_in = path_out = None

    for name, value in fields:
        key = str(name).lower()
        if key in _SHARED_FIELDS:
            shared = _address(value) or shared
        elif key in _INPUT_FIELDS:
            explicit_in = _address(value) or explicit_in
        elif key in _OUTPUT_FIELDS:
            explicit_out = _address(value) or explicit_out
        elif key == "path":
            path_in, path_out = path_ends(value)

    return CurrencyContext(
        input=explicit_in or shared or path_in,
        output=explicit_out or shared or path_out,
    )
