"""Helpers for validating, comparing and abbreviating EVM addresses."""

from __future__ import annotations

import re
from typing import Any, Optional

_EVM_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")

NATIVE_ADDRESS = "0x0000000000000000000000000000000000000000"
MSG_SENDER = "0x0000000000000000000000000000000000000001"
ADDRESS_THIS = "0x0000000000000000000000000000000000000002"

# Labels shown in place of a symbol when the registry knows nothing about these
RESERVED_LABELS = {
    MSG_SENDER: "MSG_SENDER",
    ADDRESS_THIS: "ADDRESS_THIS",
}


def is_valid_evm_address(address: Any) -> bool:
    if not isinstance(address, str):
        return False
    return bool(_EVM_ADDRESS_RE.fullmatch(address))


def normalize_address(address: str) -> str:
    return address.lower()


def is_native_address(address: Optional[str]) -> bool:
    return not address or address.lower() == NATIVE_ADDRESS


def reserved_label(address: str) -> Optional[str]:
    return RESERVED_LABELS.get(address.lower())


def truncate_address(address: str) -> str:
    """0x1234...abcd"""

    return f"{address[:6]}...{address[-4:]}"
