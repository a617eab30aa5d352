import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from routerscope.services.command_renderer import CommandRenderer, to_text
from routerscope.services.value_formatter import FORMAT_ERROR_LABEL, ValueFormatter
from routerscope.types import DecodedCommand, FormattedValue
from token_fixtures import MSG_SENDER, USDC, WETH


def v3_swap_command():
    return DecodedCommand.model_validate(
        {
            "commandName": "V3_SWAP_EXACT_IN",
            "commandType": "0",
            "params": [
                {"name": "recipient", "value": MSG_SENDER},
                {"name": "amountIn", "value": {"type": "BigNumber", "hex": "0x0de0b6b3a7640000"}},
                {"name": "path", "value": [{"tokenIn": WETH, "tokenOut": USDC, "fee": 500}]},
                {"name": "payerIsUser", "value": True},
            ],
        }
    )


@pytest.fixture
def renderer(registry):
    return CommandRenderer(ValueFormatter(registry))


@pytest.mark.asyncio
async def test_render_command_keeps_parameter_order(renderer):
    rendered = await renderer.render_command(v3_swap_command(), network_id="1")

    assert rendered.name == "V3_SWAP_EXACT_IN"
    assert rendered.kind == "0"
    assert [(p.name, p.display) for p in rendered.parameters] == [
        ("recipient", "MSG_SENDER (0x0000...0001)"),
        ("amountIn", "1.0 WETH"),
        ("path", "WETH →(0.05%) USDC"),
        ("payerIsUser", "true"),
    ]


@pytest.mark.asyncio
async def test_render_commands_numbers_from_one(renderer):
    unwrap = DecodedCommand(name="UNWRAP_WETH", kind="12", parameters=[{"name": "amountMin", "value": "0"}])

    rendered = await renderer.render_commands([v3_swap_command(), unwrap], network_id="1")

    assert [(c.index, c.name) for c in rendered] == [(1, "V3_SWAP_EXACT_IN"), (2, "UNWRAP_WETH")]


@pytest.mark.asyncio
async def test_one_failing_parameter_does_not_affect_siblings():
    registry = MagicMock()
    registry.resolve = AsyncMock(side_effect=RuntimeError("lookup failed"))
    renderer = CommandRenderer(ValueFormatter(registry))

    rendered = await renderer.render_command(v3_swap_command(), network_id="1")
    displays = {p.name: p.display for p in rendered.parameters}

    assert displays["recipient"] == FORMAT_ERROR_LABEL
    assert displays["amountIn"] == FORMAT_ERROR_LABEL
    assert displays["payerIsUser"] == "true"


@pytest.mark.asyncio
async def test_parameters_formatted_concurrently_within_limit():
    active = 0
    peak = 0

    async def slow_format(value, network_id=None, contextual_currency=None):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1
        return FormattedValue(display=str(value), raw=str(value))

    formatter = MagicMock()
    formatter.format = slow_format
    command = DecodedCommand(
        name="BATCH",
        parameters=[{"name": f"p{i}", "value": i} for i in range(6)],
    )

    rendered = await CommandRenderer(formatter, max_concurrency=2).render_command(command)

    assert peak == 2
    assert [p.display for p in rendered.parameters] == [str(i) for i in range(6)]


@pytest.mark.asyncio
async def test_to_text_indents_multiline_values(registry):
    renderer = CommandRenderer(ValueFormatter(registry))
    command = DecodedCommand(
        name="V4_SWAP",
        kind="16",
        parameters=[{"name": "params", "value": {"currencyIn": WETH, "currencyOut": USDC}}],
    )

    text = to_text([await renderer.render_command(command, network_id="1")])

    assert text == "1. V4_SWAP (type 16)\n   params: From: WETH\n      To: USDC"


@pytest.mark.asyncio
async def test_amounts_scaled_by_path_ends(renderer):
    command = DecodedCommand(
        name="V2_SWAP_EXACT_IN",
        kind="8",
        parameters=[
            {"name": "recipient", "value": MSG_SENDER},
            {"name": "amountIn", "value": {"type": "BigNumber", "hex": "0x0de0b6b3a7640000"}},
            {"name": "amountOutMin", "value": "2500000000"},
            {"name": "path", "value": [WETH, USDC]},
            {"name": "payerIsUser", "value": True},
        ],
    )

    rendered = await renderer.render_command(command, network_id="1")
    displays = {p.name: p.display for p in rendered.parameters}

    assert displays["amountIn"] == "1.0 WETH"
    assert displays["amountOutMin"] == "2500.0 USDC"
    assert displays["payerIsUser"] == "true"


@pytest.mark.asyncio
async def test_amount_scaled_by_sibling_token(renderer):
    command = DecodedCommand(
        name="SWEEP",
        kind="4",
        parameters=[
            {"name": "token", "value": USDC},
            {"name": "recipient", "value": MSG_SENDER},
            {"name": "amountMin", "value": "1500000"},
        ],
    )

    rendered = await renderer.render_command(command, network_id="1")

    assert rendered.parameters[2].display == "1.5 USDC"


@pytest.mark.asyncio
async def test_non_amount_parameters_get_no_currency():
    seen = {}

    async def record_format(value, network_id=None, contextual_currency=None):
        seen[value] = contextual_currency
        return FormattedValue(display=str(value), raw=str(value))

    formatter = MagicMock()
    formatter.format = record_format
    command = DecodedCommand(
        name="SWEEP",
        parameters=[
            {"name": "token", "value": USDC},
            {"name": "deadline", "value": 1700000000},
            {"name": "amountMin", "value": 42},
        ],
    )

    await CommandRenderer(formatter).render_command(command)

    assert seen == {USDC: None, 1700000000: None, 42: USDC}
