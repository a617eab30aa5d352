from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

NATIVE_SYMBOL = "ETH"
NATIVE_DECIMALS = 18

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenMetadata:
    """Display metadata for one token on one network."""

    symbol: str
    decimals: int
    logo_uri: str = ""
    contract_address: Optional[str] = None  # None for the network's native asset
    usd_price: float = 0.0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TokenMetadata":
        """Parse a token entry from the networks API response."""
        contract = data.get("contract") or None
        return cls(
            symbol=str(data["symbol"]),
            decimals=int(data["decimals"]),
            logo_uri=data.get("logo") or "",
            contract_address=contract,
            usd_price=float(data.get("price_in_usd") or 0.0),
        )

    @classmethod
    def native(cls) -> "TokenMetadata":
        return cls(symbol=NATIVE_SYMBOL, decimals=NATIVE_DECIMALS)

    @property
    def is_native(self) -> bool:
        return self.contract_address is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "decimals": self.decimals,
            "logo_uri": self.logo_uri,
            "contract_address": self.contract_address,
            "usd_price": self.usd_price,
        }


@dataclass(frozen=True)
class NetworkDescriptor:
    """A network discovered in the metadata snapshot, with its tokens."""

    network_id: Optional[str]  # chain id; None for networks without one
    name: str
    display_name: str
    type: str = ""
    logo_uri: str = ""
    tokens: List[TokenMetadata] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "NetworkDescriptor":
        chain_id = data.get("chain_id")
        name = str(data.get("name") or "")
        return cls(
            network_id=str(chain_id) if chain_id not in (None, "") else None,
            name=name,
            display_name=str(data.get("display_name") or name),
            type=str(data.get("type") or "").lower(),
            logo_uri=data.get("logo") or "",
            tokens=_parse_tokens(data.get("tokens") or [], name),
        )

    @property
    def is_evm(self) -> bool:
        return self.type == "evm"

    def to_dict(self, include_tokens: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "network_id": self.network_id,
            "name": self.name,
            "display_name": self.display_name,
            "type": self.type,
            "logo_uri": self.logo_uri,
            "token_count": len(self.tokens),
        }
        if include_tokens:
            data["tokens"] = [token.to_dict() for token in self.tokens]
        return data


def _parse_tokens(items: List[Any], network_name: str) -> List[TokenMetadata]:
    # Malformed entries are dropped one by one
    tokens: List[TokenMetadata] = []
    for item in items:
        try:
            tokens.append(TokenMetadata.from_api(item))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed token entry on %s: %s", network_name or "unknown network", e)
    return tokens
