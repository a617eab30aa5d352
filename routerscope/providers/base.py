from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..types.tokens import NetworkDescriptor


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class TokenMetadataSource(Provider):
    """Provider for per-network token metadata snapshots"""

    @abstractmethod
    async def fetch_networks(self) -> List[NetworkDescriptor]:
        """Fetch every network with its token list.

        Raises on transport failure or a malformed response; callers decide
        how to degrade.
        """
        pass
