#!/usr/bin/env python3
"""Command-line renderer for decoded router commands"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError
from structlog.contextvars import bound_contextvars

from routerscope.logging_config import setup_logging
from routerscope.services.command_renderer import CommandRenderer, to_text
from routerscope.services.token_registry import get_token_registry
from routerscope.services.value_formatter import ValueFormatter
from routerscope.types import DecodedCommand


def load_commands(path: Path) -> List[DecodedCommand]:
    """Read decoder output: a list of commands or {"commands": [...]}"""

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("commands", [])
    if not isinstance(data, list):
        raise ValueError("expected a list of commands")
    return [DecodedCommand.model_validate(item) for item in data]


async def cli_networks(show_all: bool = False) -> int:
    registry = get_token_registry()
    networks = await (registry.list_networks() if show_all else registry.list_evm_networks())

    if not networks:
        print("❌ No networks available (metadata source unreachable or disabled)")
        return 1

    default_id = await registry.default_network_id()
    print(f"\n🌐 Networks ({len(networks)})")
    print("=" * 50)
    for network in networks:
        marker = "*" if default_id and network.network_id == default_id else " "
        chain = network.network_id or "-"
        print(f"{marker} {chain:>10}  {network.display_name:<28} {len(network.tokens):>4} tokens")
    return 0


async def cli_format(path: Path, network_id: Optional[str] = None) -> int:
    try:
        commands = load_commands(path)
    except (OSError, ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"❌ Error: could not read {path}: {e}")
        return 1

    registry = get_token_registry()
    network_id = network_id or await registry.default_network_id()
    renderer = CommandRenderer(ValueFormatter(registry))

    with bound_contextvars(network_id=network_id, source_file=str(path)):
        rendered = await renderer.render_commands(commands, network_id=network_id)
    print(f"🔍 {len(rendered)} commands (network {network_id or 'unknown'})")
    print("-" * 50)
    print(to_text(rendered))
    return 0


async def cli_value(text: str, network_id: Optional[str] = None, currency: Optional[str] = None) -> int:
    try:
        value: Any = json.loads(text)
    except ValueError:
        # Not JSON: treat as a bare string, e.g. an address
        value = text

    formatter = ValueFormatter(get_token_registry())
    result = await formatter.format(value, network_id=network_id, contextual_currency=currency)
    print(result.display)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Routerscope CLI")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command")

    networks_parser = subparsers.add_parser("networks", help="List networks known to the metadata source")
    networks_parser.add_argument("--all", action="store_true", help="Include non-EVM networks")

    format_parser = subparsers.add_parser("format", help="Render a JSON dump of decoded commands")
    format_parser.add_argument("file", type=Path, help="JSON file with decoder output")
    format_parser.add_argument("--network", help="Chain id (default: configured default network)")

    value_parser = subparsers.add_parser("value", help="Render a single JSON value")
    value_parser.add_argument("value", help="JSON value or bare string")
    value_parser.add_argument("--network", help="Chain id")
    value_parser.add_argument("--currency", help="Token address that scales a bare amount")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "networks":
        return await cli_networks(args.all)

    if args.command == "format":
        return await cli_format(args.file, args.network)

    if args.command == "value":
        return await cli_value(args.value, args.network, args.currency)

    print(f"❌ Unknown command: {args.command}")
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
