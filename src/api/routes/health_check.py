import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.repositories.errors import RepositoryError
from src.app.services.credential_provider import ICredentialProvider
from src.app.services.unit_of_work import UnitOfWork
from src.depends import get_credential_provider, get_unit_of_work
from src.domain.base import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    uow: UnitOfWork = Depends(get_unit_of_work),
    credential_provider: ICredentialProvider = Depends(get_credential_provider),
):
    """
    Liveness check: database round trip plus SSO status

    Returns:
        - 200 OK: Database reachable
        - 503 Service Unavailable: Database unreachable
    """
    try:
        async with uow:
            await uow.ping()
    except RepositoryError as exc:
        logger.error(f"Health check failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "error": str(exc)},
        )

    return {
        "status": "healthy",
        "timestamp": utcnow().isoformat() + "Z",
        "checks": {
            "database": "connected",
            "xsuaa": "enabled" if credential_provider.is_sso_enabled() else "disabled",
        },
    }
