from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..services.token_registry import RegistryState, TokenRegistry, get_token_registry

router = APIRouter()


@router.get("/healthz")
async def health_check(registry: TokenRegistry = Depends(get_token_registry)) -> Dict[str, Any]:
    """Report registry lifecycle and metadata source status from local state only"""

    source_status = await registry.source.health_check()
    loaded = registry.state is RegistryState.LOADED
    networks = len(await registry.list_networks()) if loaded else 0
    healthy = source_status["status"] == "healthy" and registry.load_error is None

    return {
        "status": "healthy" if healthy else "degraded",
        "registry": {
            "state": registry.state.value,
            "networks": networks,
            "load_error": registry.load_error,
        },
        "providers": {registry.source.name: source_status},
    }
