"""
Shape classification for decoded parameter values.

Decoder output is untyped: the same dict/list/str building blocks encode
amounts, addresses, three different multi-hop path layouts and swap
descriptors. ``classify`` sniffs a value once and tags it with a ValueKind so
the formatter can dispatch on the tag instead of re-inspecting field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from .address import is_valid_evm_address
from .amounts import (
    CONTRACT_BALANCE,
    is_bignumber_record,
    is_contract_balance_hex,
    is_decimal_string,
    to_int,
)

SWAP_FIELDS = ("currencyIn", "currencyOut", "amountIn", "amountOut", "amountOutMinimum", "path")


class ValueKind(str, Enum):
    NULL = "null"
    FULL_BALANCE = "full_balance"
    BIG_AMOUNT = "big_amount"
    ADDRESS = "address"
    ADDRESS_PATH = "address_path"
    FEE_TIER_PATH = "fee_tier_path"
    INTERMEDIATE_CURRENCY_PATH = "intermediate_currency_path"
    NAMED_FIELD_LIST = "named_field_list"
    SWAP_DESCRIPTOR = "swap_descriptor"
    SCALAR = "scalar"
    OPAQUE_SEQUENCE = "opaque_sequence"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class ClassifiedValue:
    kind: ValueKind
    value: Any
    amount: Optional[int] = None  # set for BIG_AMOUNT only


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _has_keys(item: Any, *keys: str) -> bool:
    return isinstance(item, Mapping) and all(key in item for key in keys)


def _classify_sequence(items: Sequence[Any]) -> ValueKind:
    if all(is_valid_evm_address(item) for item in items):
        # Includes the empty sequence
        return ValueKind.ADDRESS_PATH
    if all(_has_keys(item, "tokenIn", "tokenOut") for item in items):
        return ValueKind.FEE_TIER_PATH
    if all(_has_keys(item, "intermediateCurrency") for item in items):
        return ValueKind.INTERMEDIATE_CURRENCY_PATH
    if all(_has_keys(item, "name", "value") for item in items):
        return ValueKind.NAMED_FIELD_LIST
    return ValueKind.OPAQUE_SEQUENCE


def _as_amount(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int) or is_decimal_string(value) or is_bignumber_record(value):
        try:
            return to_int(value)
        except ValueError:
            return None
    if is_contract_balance_hex(value):
        return CONTRACT_BALANCE
    return None


def classify(value: Any) -> ClassifiedValue:
    if value is None:
        return ClassifiedValue(ValueKind.NULL, value)

    amount = _as_amount(value)
    if amount is not None:
        if amount == CONTRACT_BALANCE:
            return ClassifiedValue(ValueKind.FULL_BALANCE, value)
        return ClassifiedValue(ValueKind.BIG_AMOUNT, value, amount=amount)

    if is_bignumber_record(value):
        # Record with an unparseable hex field
        return ClassifiedValue(ValueKind.OPAQUE, value)

    if is_valid_evm_address(value):
        return ClassifiedValue(ValueKind.ADDRESS, value)

    if _is_sequence(value):
        return ClassifiedValue(_classify_sequence(value), value)

    if isinstance(value, Mapping):
        if any(field in value for field in SWAP_FIELDS):
            return ClassifiedValue(ValueKind.SWAP_DESCRIPTOR, value)
        return ClassifiedValue(ValueKind.OPAQUE, value)

    if isinstance(value, (bool, int, float, str, bytes)):
        return ClassifiedValue(ValueKind.SCALAR, value)

    return ClassifiedValue(ValueKind.OPAQUE, value)
