"""
Tests for value shape classification.

Each decoder shape must land in exactly one ValueKind.
"""

import pytest

from routerscope.services.amounts import CONTRACT_BALANCE_HEX
from routerscope.services.value_classifier import ValueKind, classify

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


@pytest.mark.parametrize(
    "value,kind",
    [
        (None, ValueKind.NULL),
        (True, ValueKind.SCALAR),
        (1.5, ValueKind.SCALAR),
        ("hello", ValueKind.SCALAR),
        (b"\x01\x02", ValueKind.SCALAR),
        ("0x1234", ValueKind.SCALAR),
        (42, ValueKind.BIG_AMOUNT),
        ("42", ValueKind.BIG_AMOUNT),
        ({"type": "BigNumber", "hex": "0x2a"}, ValueKind.BIG_AMOUNT),
        (CONTRACT_BALANCE_HEX, ValueKind.FULL_BALANCE),
        ({"_hex": CONTRACT_BALANCE_HEX}, ValueKind.FULL_BALANCE),
        (2 ** 255, ValueKind.FULL_BALANCE),
        (WETH, ValueKind.ADDRESS),
        ([], ValueKind.ADDRESS_PATH),
        ([WETH, USDC], ValueKind.ADDRESS_PATH),
        ((WETH, USDC), ValueKind.ADDRESS_PATH),
        ([{"tokenIn": WETH, "tokenOut": USDC, "fee": 500}], ValueKind.FEE_TIER_PATH),
        ([{"intermediateCurrency": USDC, "fee": 500}], ValueKind.INTERMEDIATE_CURRENCY_PATH),
        ([{"name": "amount", "value": "1"}], ValueKind.NAMED_FIELD_LIST),
        ([WETH, 5], ValueKind.OPAQUE_SEQUENCE),
        ([{"tokenIn": WETH}], ValueKind.OPAQUE_SEQUENCE),
        ({"currencyIn": WETH}, ValueKind.SWAP_DESCRIPTOR),
        ({"amountOutMinimum": "1"}, ValueKind.SWAP_DESCRIPTOR),
        ({"path": []}, ValueKind.SWAP_DESCRIPTOR),
        ({"foo": "bar"}, ValueKind.OPAQUE),
        ({"type": "BigNumber", "hex": "0xnothex"}, ValueKind.OPAQUE),
        (object(), ValueKind.OPAQUE),
    ],
)
def test_classify(value, kind):
    assert classify(value).kind is kind


def test_big_amount_carries_normalised_integer():
    assert classify({"type": "BigNumber", "hex": "0x0de0b6b3a7640000"}).amount == 10 ** 18
    assert classify("1000000000000000000").amount == 10 ** 18


def test_malformed_address_is_a_plain_string():
    assert classify("0x" + "z" * 40).kind is ValueKind.SCALAR


def test_classification_keeps_original_value():
    value = [{"intermediateCurrency": USDC}]
    assert classify(value).value is value
