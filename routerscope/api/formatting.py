from fastapi import APIRouter, Depends
from structlog.contextvars import bound_contextvars

from ..services.command_renderer import CommandRenderer
from ..services.token_registry import TokenRegistry, get_token_registry
from ..services.value_formatter import ValueFormatter
from ..types.commands import (
    FormatCommandsRequest,
    FormatCommandsResponse,
    FormattedValue,
    FormatValueRequest,
)

router = APIRouter(prefix="/format")


@router.post("/value")
async def format_value(
    req: FormatValueRequest,
    registry: TokenRegistry = Depends(get_token_registry),
) -> FormattedValue:
    formatter = ValueFormatter(registry)
    with bound_contextvars(network_id=req.network_id):
        return await formatter.format(
            req.value,
            network_id=req.network_id,
            contextual_currency=req.contextual_currency,
        )


@router.post("/commands")
async def format_commands(
    req: FormatCommandsRequest,
    registry: TokenRegistry = Depends(get_token_registry),
) -> FormatCommandsResponse:
    renderer = CommandRenderer(ValueFormatter(registry))
    with bound_contextvars(network_id=req.network_id, commands=len(req.commands)):
        rendered = await renderer.render_commands(req.commands, network_id=req.network_id)
    return FormatCommandsResponse(commands=rendered, network_id=req.network_id)
