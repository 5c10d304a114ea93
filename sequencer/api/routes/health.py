"""Health check endpoint."""

from fastapi import APIRouter

from sequencer.core.config import get_config

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check.

    Returns:
        200 OK with application name and environment
    """
    config = get_config()
    return {"status": "ok", "app": config.app_name, "env": config.app_env}
