"""Health check endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from typing import Dict

from ..models import HealthStatus
from ..dependencies import get_client_provider
from ...client import MilvusClientProvider

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthStatus)
async def health_check(
    client_provider: MilvusClientProvider = Depends(get_client_provider)
) -> HealthStatus:
    """Check Milvus connectivity."""
    milvus_ok = await client_provider.check_health()

    return HealthStatus(
        status="healthy" if milvus_ok else "unhealthy",
        milvus=milvus_ok
    )


@router.get("/ready")
async def readiness_probe(
    client_provider: MilvusClientProvider = Depends(get_client_provider)
) -> Dict[str, str]:
    """Kubernetes readiness probe."""
    health = await health_check(client_provider)
    if health.status == "unhealthy":
        raise HTTPException(status_code=503, detail="Service not ready")
    return {"status": "ready"}


@router.get("/live")
async def liveness_probe() -> Dict[str, str]:
    """Kubernetes liveness probe."""
    return {"status": "alive"}
