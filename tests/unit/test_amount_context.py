import pytest

from routerscope.services.amount_context import (
    CurrencyContext,
    amount_side,
    infer_currency_context,
    path_ends,
)
from token_fixtures import DAI, UNKNOWN, USDC, WETH


@pytest.mark.parametrize(
    "name,side",
    [
        ("amountIn", "in"),
        ("amountInMax", "in"),
        ("amount", "in"),
        ("amountMin", "in"),
        ("amountOut", "out"),
        ("amountOutMin", "out"),
        ("amountOutMinimum", "out"),
        ("recipient", None),
        ("deadline", None),
        ("outputToken", None),
    ],
)
def test_amount_side(name, side):
    assert amount_side(name) == side


def test_path_ends_address_path():
    assert path_ends([WETH, USDC, DAI]) == (WETH, DAI)


def test_path_ends_fee_tier_path():
    path = [
        {"tokenIn": WETH, "tokenOut": USDC, "fee": 500},
        {"tokenIn": USDC, "tokenOut": DAI, "fee": 100},
    ]
    assert path_ends(path) == (WETH, DAI)


def test_path_ends_intermediate_path_has_no_input():
    path = [{"intermediateCurrency": USDC}, {"intermediateCurrency": DAI}]
    assert path_ends(path) == (None, DAI)


@pytest.mark.parametrize("path", [[], None, "0xc02aaa39", [1, 2]])
def test_path_ends_unrecognised(path):
    assert path_ends(path) == (None, None)


def test_infer_from_path():
    context = infer_currency_context([("amountIn", 1), ("path", [WETH, USDC])])
    assert context == CurrencyContext(input=WETH, output=USDC)


def test_shared_token_beats_path():
    context = infer_currency_context([("path", [WETH, USDC]), ("token", DAI)])
    assert context == CurrencyContext(input=DAI, output=DAI)


def test_explicit_sides_beat_shared_token():
    context = infer_currency_context([("token", DAI), ("tokenIn", WETH), ("tokenOut", USDC)])
    assert context == CurrencyContext(input=WETH, output=USDC)


def test_non_address_currency_is_ignored():
    context = infer_currency_context([("token", "USDC"), ("currency", 7)])
    assert context == CurrencyContext()


def test_for_field_falls_back_to_default():
    context = CurrencyContext(input=WETH)

    assert context.for_field("amountIn") == WETH
    assert context.for_field("amountOut", UNKNOWN) == UNKNOWN
    assert context.for_field("recipient", UNKNOWN) == UNKNOWN
    assert context.for_field("recipient") is None
