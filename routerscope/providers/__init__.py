from .base import Provider, TokenMetadataSource
from .layerswap import LayerSwapProvider

__all__ = ["LayerSwapProvider", "Provider", "TokenMetadataSource"]
