# learn_circassian\adapters\api\routers\health.py
from fastapi import APIRouter, Depends, status, Response
from dependency_injector.wiring import inject, Provide
from typing import Dict
import structlog

from learn_circassian.shared.container import Container
from learn_circassian.core.ports.word_store import IWordStore

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["System"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """
    Liveness Probe.
    Returns 200 OK if the process is serving requests.
    """
    return {"status": "ok", "service": "learn-circassian-api"}


@router.get("/ready", status_code=status.HTTP_200_OK)
@inject
async def readiness_probe(
    response: Response,
    store: IWordStore = Depends(Provide[Container.word_store]),
) -> Dict[str, str]:
    """
    Readiness Probe.
    The service is ready once the store file is present and answers a query.
    Returns 503 Service Unavailable otherwise.
    """
    health_status = {"store": "down"}

    try:
        if await store.health_check():
            health_status["store"] = "up"
    except Exception as e:
        logger.error("health_check_failed", component="store", error=str(e))

    if health_status["store"] != "up":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_probe_failed", status=health_status)

    return health_status
