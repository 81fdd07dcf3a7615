from typing import Optional

from fastapi import Request, status

from src.api.error import ClientError
from src.app.services.bearer_verifier import XsuaaPrincipal
from src.libs.result import Error


def optional_xsuaa_principal(request: Request) -> Optional[XsuaaPrincipal]:
    """Caller put on the request by the session gate after verifying its bearer token"""
    return getattr(request.state, "xsuaa_user", None)


def get_xsuaa_principal(request: Request) -> XsuaaPrincipal:
    principal = optional_xsuaa_principal(request)
    if principal is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "Bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return principal
