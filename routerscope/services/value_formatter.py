"""
Recursive, token-aware rendering of decoded parameter values.

Every call yields two strings: ``display`` for people and ``raw``, the JSON
serialisation of the value exactly as the decoder produced it. ``raw`` never
depends on registry lookups, so it survives a metadata outage unchanged while
``display`` degrades to truncated addresses and generic units.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel

from ..types.commands import FormattedValue
from .address import NATIVE_ADDRESS, reserved_label, truncate_address
from .amount_context import infer_currency_context
from .amounts import (
    CONTRACT_BALANCE_LABEL,
    FALLBACK_DECIMALS,
    FALLBACK_UNIT,
    format_fee_percent,
    is_bignumber_record,
    record_hex,
    scale_amount,
)
from .token_registry import NetworkId, TokenRegistry
from .value_classifier import ClassifiedValue, ValueKind, classify

logger = logging.getLogger(__name__)

NULL_LABEL = "null"
EMPTY_SEQUENCE = "[]"
OBJECT_LABEL = "Object"
SWAP_PLACEHOLDER = "Swap Details"
UNKNOWN_TOKEN_LABEL = "Unknown"
NATIVE_LABEL = "Native ETH"
FORMAT_ERROR_LABEL = "Error formatting value"

Handler = Callable[[ClassifiedValue, Optional[NetworkId], Optional[str]], Awaitable[str]]


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return "0x" + bytes(obj).hex()
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    return str(obj)


def serialize_raw(value: Any) -> str:
    """JSON text of the untouched input value."""

    try:
        return json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)
    except (TypeError, ValueError, RecursionError):
        return repr(value)


class ValueFormatter:
    """Render decoded values, resolving token addresses through a TokenRegistry."""

    def __init__(self, registry: TokenRegistry) -> None:
        self._registry = registry
        self._handlers: Dict[ValueKind, Handler] = {
            ValueKind.NULL: self._format_null,
            ValueKind.FULL_BALANCE: self._format_full_balance,
            ValueKind.BIG_AMOUNT: self._format_big_amount,
            ValueKind.ADDRESS: self._format_address,
            ValueKind.ADDRESS_PATH: self._format_address_path,
            ValueKind.FEE_TIER_PATH: self._format_fee_tier_path,
            ValueKind.INTERMEDIATE_CURRENCY_PATH: self._format_intermediate_path,
            ValueKind.NAMED_FIELD_LIST: self._format_named_fields,
            ValueKind.SWAP_DESCRIPTOR: self._format_swap,
            ValueKind.SCALAR: self._format_scalar,
            ValueKind.OPAQUE_SEQUENCE: self._format_opaque_sequence,
            ValueKind.OPAQUE: self._format_opaque,
        }
        missing = set(ValueKind) - set(self._handlers)
        if missing:
            raise RuntimeError(f"no formatter for value kinds: {sorted(k.value for k in missing)}")

    @property
    def registry(self) -> TokenRegistry:
        return self._registry

    async def format(
        self,
        value: Any,
        network_id: Optional[NetworkId] = None,
        contextual_currency: Optional[str] = None,
    ) -> FormattedValue:
        """Render ``value`` for display.

        Args:
            value: Decoded parameter value, possibly nested.
            network_id: Active chain id, scopes token lookups.
            contextual_currency: Token address that scales a bare amount.

        Returns:
            FormattedValue with ``display`` and ``raw``. Never raises.
        """
        raw = serialize_raw(value)
        try:
            classified = classify(value)
            display = await self._handlers[classified.kind](classified, network_id, contextual_currency)
        except Exception:
            logger.exception("Failed to format %s value", type(value).__name__)
            display = FORMAT_ERROR_LABEL
        return FormattedValue(display=display, raw=raw)

    # ------------------------------------------------------------------
    # token helpers
    # ------------------------------------------------------------------

    async def _token_label(
        self,
        address: Any,
        network_id: Optional[NetworkId],
        unresolved: Optional[str] = None,
    ) -> str:
        if not isinstance(address, str):
            return str(address)
        token = await self._registry.resolve(address, network_id)
        if token is not None:
            return token.symbol
        if unresolved is not None:
            return unresolved
        return truncate_address(address) if len(address) > 10 else address

    async def _scaled_amount(
        self,
        amount: int,
        currency: Optional[str],
        network_id: Optional[NetworkId],
    ) -> str:
        token = None
        if isinstance(currency, str) and currency:
            token = await self._registry.resolve(currency, network_id)
        if token is None:
            return f"{scale_amount(amount, FALLBACK_DECIMALS)} {FALLBACK_UNIT}"
        return f"{scale_amount(amount, token.decimals)} {token.symbol}"

    async def _amount_field(
        self,
        value: Any,
        currency: Optional[str],
        network_id: Optional[NetworkId],
    ) -> str:
        """An amount whose unit is known from its position, e.g. a swap's amountIn."""

        classified = classify(value)
        if classified.kind is ValueKind.FULL_BALANCE:
            return CONTRACT_BALANCE_LABEL
        if classified.kind is ValueKind.BIG_AMOUNT:
            return await self._scaled_amount(classified.amount, currency, network_id)
        return str(value)

    # ------------------------------------------------------------------
    # leaves
    # ------------------------------------------------------------------

    async def _format_null(self, classified, network_id, contextual_currency) -> str:
        return NULL_LABEL

    async def _format_full_balance(self, classified, network_id, contextual_currency) -> str:
        return CONTRACT_BALANCE_LABEL

    async def _format_big_amount(self, classified, network_id, contextual_currency) -> str:
        if contextual_currency:
            return await self._scaled_amount(classified.amount, contextual_currency, network_id)
        # No unit to scale by: show the integer itself
        return str(classified.amount)

    async def _format_address(self, classified, network_id, contextual_currency) -> str:
        address = classified.value
        token = await self._registry.resolve(address, network_id)
        label = token.symbol if token is not None else reserved_label(address)
        if label:
            return f"{label} ({truncate_address(address)})"
        return truncate_address(address)

    async def _format_scalar(self, classified, network_id, contextual_currency) -> str:
        value = classified.value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (bytes, bytearray)):
            return "0x" + bytes(value).hex()
        return str(value)

    async def _format_opaque(self, classified, network_id, contextual_currency) -> str:
        value = classified.value
        if is_bignumber_record(value):
            # Unparseable amount: show what the decoder gave us
            return str(record_hex(value))
        return OBJECT_LABEL

    async def _format_opaque_sequence(self, classified, network_id, contextual_currency) -> str:
        count = len(classified.value)
        return f"sequence of {count} item{'' if count == 1 else 's'}"

    # ------------------------------------------------------------------
    # paths
    # ------------------------------------------------------------------

    async def _format_address_path(self, classified, network_id, contextual_currency) -> str:
        path = classified.value
        if not path:
            return EMPTY_SEQUENCE

        symbols: List[str] = []
        for address in path:
            symbols.append(await self._token_label(address, network_id))
        return " → ".join(symbols)

    async def _format_fee_tier_path(self, classified, network_id, contextual_currency) -> str:
        hops = classified.value
        if not hops:
            return EMPTY_SEQUENCE

        steps = [await self._token_label(hops[0]["tokenIn"], network_id)]
        for hop in hops:
            symbol = await self._token_label(hop["tokenOut"], network_id)
            fee = format_fee_percent(hop.get("fee"))
            arrow = f"→({fee}%)" if fee else "→"
            steps.append(f"{arrow} {symbol}")
        return " ".join(steps)

    async def _render_intermediate_path(self, hops: Any, network_id: Optional[NetworkId]) -> str:
        steps: List[str] = []
        for hop in hops:
            if not isinstance(hop, Mapping):
                continue
            currency = hop.get("intermediateCurrency")
            if not currency:
                continue
            symbol = await self._token_label(currency, network_id, unresolved=UNKNOWN_TOKEN_LABEL)
            fee = format_fee_percent(hop.get("fee"))
            steps.append(f"→ {symbol} ({fee}%)" if fee else f"→ {symbol}")
        return " ".join(steps)

    async def _format_intermediate_path(self, classified, network_id, contextual_currency) -> str:
        rendered = await self._render_intermediate_path(classified.value, network_id)
        return rendered or EMPTY_SEQUENCE

    # ------------------------------------------------------------------
    # structures
    # ------------------------------------------------------------------

    async def _format_named_fields(self, classified, network_id, contextual_currency) -> str:
        fields = classified.value
        context = infer_currency_context((item["name"], item["value"]) for item in fields)

        lines: List[str] = []
        for item in fields:
            currency = context.for_field(item["name"], contextual_currency)
            result = await self.format(item["value"], network_id=network_id, contextual_currency=currency)
            lines.append(f"{item['name']}: {result.display}")
        return "\n".join(lines)

    async def _currency_label(self, currency: Any, network_id: Optional[NetworkId]) -> str:
        if not isinstance(currency, str):
            return str(currency)
        token = await self._registry.resolve(currency, network_id)
        if token is not None:
            return token.symbol
        if currency.lower() == NATIVE_ADDRESS:
            return NATIVE_LABEL
        return truncate_address(currency)

    async def _format_swap(self, classified, network_id, contextual_currency) -> str:
        swap = classified.value

        def present(field: str) -> bool:
            return swap.get(field) not in (None, "")

        path = swap.get("path") if isinstance(swap.get("path"), (list, tuple)) else None

        # The explicit output currency wins; otherwise the first hop's currency
        output_currency = swap.get("currencyOut") if present("currencyOut") else None
        if output_currency is None and path:
            first_hop = path[0]
            if isinstance(first_hop, Mapping):
                output_currency = first_hop.get("intermediateCurrency") or None

        lines: List[str] = []
        if present("currencyIn"):
            lines.append(f"From: {await self._currency_label(swap['currencyIn'], network_id)}")
        if present("currencyOut"):
            lines.append(f"To: {await self._currency_label(swap['currencyOut'], network_id)}")
        if present("amountIn"):
            amount = await self._amount_field(swap["amountIn"], swap.get("currencyIn"), network_id)
            lines.append(f"Amount In: {amount}")
        if present("amountOut"):
            amount = await self._amount_field(swap["amountOut"], output_currency, network_id)
            lines.append(f"Amount Out: {amount}")
        if present("amountOutMinimum"):
            amount = await self._amount_field(swap["amountOutMinimum"], output_currency, network_id)
            lines.append(f"Min Out: {amount}")
        if path is not None:
            rendered = await self._render_intermediate_path(path, network_id)
            if rendered:
                lines.append(f"Path: {rendered}")

        return "\n".join(lines) if lines else SWAP_PLACEHOLDER
