"""Render whole decoded commands, one formatted line per parameter."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

from ..config import settings
from ..types.commands import DecodedCommand, Parameter, RenderedCommand, RenderedParameter
from .amount_context import CurrencyContext, infer_currency_context
from .token_registry import NetworkId
from .value_formatter import ValueFormatter

logger = logging.getLogger(__name__)


class CommandRenderer:
    """Formats every parameter of a command concurrently, keeping their order."""

    def __init__(self, formatter: ValueFormatter, max_concurrency: Optional[int] = None) -> None:
        self.formatter = formatter
        self.max_concurrency = max_concurrency or settings.max_parameter_concurrency

    async def _render_parameter(
        self,
        parameter: Parameter,
        network_id: Optional[NetworkId],
        context: CurrencyContext,
        semaphore: asyncio.Semaphore,
    ) -> RenderedParameter:
        async with semaphore:
            result = await self.formatter.format(
                parameter.value,
                network_id=network_id,
                contextual_currency=context.for_field(parameter.name),
            )
        return RenderedParameter(name=parameter.name, display=result.display, raw=result.raw)

    async def render_command(
        self,
        command: DecodedCommand,
        network_id: Optional[NetworkId] = None,
        index: int = 1,
    ) -> RenderedCommand:
        # Amounts take their currency from sibling token and path parameters
        context = infer_currency_context((p.name, p.value) for p in command.parameters)
        semaphore = asyncio.Semaphore(self.max_concurrency)
        parameters = await asyncio.gather(
            *(self._render_parameter(p, network_id, context, semaphore) for p in command.parameters)
        )
        return RenderedCommand(
            index=index,
            name=command.name,
            kind=command.kind,
            parameters=list(parameters),
        )

    async def render_commands(
        self,
        commands: Iterable[DecodedCommand],
        network_id: Optional[NetworkId] = None,
    ) -> List[RenderedCommand]:
        rendered: List[RenderedCommand] = []
        for index, command in enumerate(commands, 1):
            rendered.append(await self.render_command(command, network_id=network_id, index=index))
        logger.debug("Rendered %d commands for network %s", len(rendered), network_id)
        return rendered


def to_text(rendered: Iterable[RenderedCommand]) -> str:
    """Plain-text listing of rendered commands."""

    lines: List[str] = []
    for command in rendered:
        header = f"{command.index}. {command.name}"
        if command.kind:
            header += f" (type {command.kind})"
        lines.append(header)
        for parameter in command.parameters:
            first, *rest = parameter.display.split("\n")
            lines.append(f"   {parameter.name}: {first}")
            lines.extend(f"      {line}" for line in rest)
    return "\n".join(lines)
