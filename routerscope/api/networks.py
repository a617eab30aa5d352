from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ..services.token_registry import TokenRegistry, get_token_registry

router = APIRouter()


@router.get("/networks")
async def list_networks(
    evm_only: bool = Query(default=True, description="Only EVM networks, sorted by display name"),
    registry: TokenRegistry = Depends(get_token_registry),
) -> Dict[str, Any]:
    if evm_only:
        networks = await registry.list_evm_networks()
    else:
        networks = await registry.list_networks()

    return {
        "networks": [network.to_dict() for network in networks],
        "default_network_id": await registry.default_network_id(),
    }
