"""
Process-wide token metadata registry.

Lifecycle is ``unfetched -> fetching -> loaded``. The snapshot is fetched
lazily on first demand, exactly once: concurrent callers queue on the fetch
lock and find the registry loaded when they get it. A failed fetch leaves the
registry loaded but empty for the rest of the process, so lookups report
"not found" instead of raising.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import structlog

from ..config import settings
from ..providers.base import TokenMetadataSource
from ..providers.layerswap import LayerSwapProvider
from ..types.tokens import NetworkDescriptor, TokenMetadata
from .address import is_native_address, is_valid_evm_address, normalize_address

logger = structlog.stdlib.get_logger("token_registry")

NetworkId = Union[str, int]


class RegistryState(str, Enum):
    UNFETCHED = "unfetched"
    FETCHING = "fetching"
    LOADED = "loaded"


class TokenRegistry:
    """Address -> token metadata lookups with chain-scoped precedence."""

    def __init__(self, source: Optional[TokenMetadataSource] = None) -> None:
        self._source = source or LayerSwapProvider()
        self._state = RegistryState.UNFETCHED
        self._fetch_lock = asyncio.Lock()

        # Both maps are swapped in whole once the fetch finishes
        self._scoped: Dict[Tuple[str, str], TokenMetadata] = {}
        self._by_address: Dict[str, TokenMetadata] = {}
        self._networks: List[NetworkDescriptor] = []
        self._load_error: Optional[str] = None

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def source(self) -> TokenMetadataSource:
        return self._source

    @property
    def load_error(self) -> Optional[str]:
        """Why the snapshot is empty, once a load has failed or been skipped."""
        return self._load_error

    async def ensure_loaded(self) -> None:
        if self._state is RegistryState.LOADED:
            return

        async with self._fetch_lock:
            if self._state is RegistryState.LOADED:
                return

            self._state = RegistryState.FETCHING
            networks = await self._fetch()
            scoped, by_address = self._index(networks)

            self._networks = networks
            self._scoped = scoped
            self._by_address = by_address
            self._state = RegistryState.LOADED

    async def _fetch(self) -> List[NetworkDescriptor]:
        source_name = getattr(self._source, "name", type(self._source).__name__)

        try:
            if not await self._source.ready():
                logger.warning("token_registry_source_unavailable", source=source_name)
                self._load_error = "metadata source unavailable"
                return []

            logger.info("token_registry_fetch_started", source=source_name)
            networks = await self._source.fetch_networks()
        except Exception as exc:
            logger.warning(
                "token_registry_fetch_failed",
                source=source_name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            self._load_error = f"{type(exc).__name__}: {exc}"
            return []

        logger.info(
            "token_registry_loaded",
            source=source_name,
            networks=len(networks),
            tokens=sum(len(network.tokens) for network in networks),
        )
        return networks

    @staticmethod
    def _index(
        networks: List[NetworkDescriptor],
    ) -> Tuple[Dict[Tuple[str, str], TokenMetadata], Dict[str, TokenMetadata]]:
        scoped: Dict[Tuple[str, str], TokenMetadata] = {}
        by_address: Dict[str, TokenMetadata] = {}

        for network in networks:
            for token in network.tokens:
                if not token.contract_address:
                    continue
                address = normalize_address(token.contract_address)
                if network.network_id is not None:
                    scoped[(network.network_id, address)] = token
                # Last network listing an address wins the unscoped slot
                by_address[address] = token

        return scoped, by_address

    async def resolve(
        self,
        address: Optional[str],
        network_id: Optional[NetworkId] = None,
    ) -> Optional[TokenMetadata]:
        """Look up token metadata for ``address``.

        Args:
            address: Token contract address; empty or the zero address means native.
            network_id: Chain id; its entry wins over the network-agnostic one.

        Returns:
            TokenMetadata if found, None otherwise.
        """
        await self.ensure_loaded()

        if is_native_address(address):
            return TokenMetadata.native()

        if not is_valid_evm_address(address):
            return None

        key = normalize_address(address)
        if network_id not in (None, ""):
            token = self._scoped.get((str(network_id), key))
            if token is not None:
                return token

        return self._by_address.get(key)

    async def list_networks(self) -> List[NetworkDescriptor]:
        await self.ensure_loaded()
        return list(self._networks)

    async def list_evm_networks(self) -> List[NetworkDescriptor]:
        networks = await self.list_networks()
        evm = [network for network in networks if network.is_evm]
        return sorted(evm, key=lambda network: network.display_name.lower())

    async def default_network_id(self, preferred: Optional[str] = None) -> Optional[str]:
        """Preferred network if it is listed, else the first EVM network."""

        preferred = preferred or settings.default_network_id
        networks = await self.list_evm_networks()
        for network in networks:
            if network.network_id == preferred:
                return preferred
        for network in networks:
            if network.network_id:
                return network.network_id
        return None


_default_registry: Optional[TokenRegistry] = None


def get_token_registry() -> TokenRegistry:
    """Get or create the process-wide TokenRegistry."""

    global _default_registry
    if _default_registry is None:
        _default_registry = TokenRegistry()
    return _default_registry


def reset_token_registry() -> None:
    """Forget the process-wide registry (tests only)."""

    global _default_registry
    _default_registry = None
