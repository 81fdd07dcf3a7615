from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
from .middleware.session_gate import SessionGateMiddleware
from src.adapter.services.xsuaa_bearer import XsuaaBearerVerifier
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(
    ApplicationConfig, credential_provider=None, lifespan=None, bearer_verifier=None
) -> FastAPI:
    app = FastAPI(title="Hybrid Auth API", version="0.1.0", lifespan=lifespan)

    if credential_provider is None:
        from src.depends import credential_discovery

        credential_provider = credential_discovery

    app.add_middleware(
        SessionGateMiddleware,
        credential_provider=credential_provider,
        cookie_name=ApplicationConfig.SESSION_COOKIE_NAME,
        login_path=ApplicationConfig.LOGIN_PATH,
        bearer_verifier=bearer_verifier or XsuaaBearerVerifier(),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check, sso, user

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(sso.router, prefix=prefix, tags=["SSO"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(user.router, prefix=prefix, tags=["User"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
