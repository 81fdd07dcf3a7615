"""
XSUAA Bearer Verifier

RS256 verification of access tokens against the bound instance's
verificationkey. The token's audience must include our clientid.
"""

import logging

from jose import JWTError, jwt

from src.app.services.bearer_verifier import IBearerTokenVerifier, XsuaaPrincipal
from src.app.services.credential_provider import SsoCredentials
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def strip_bearer_prefix(header_value: str) -> str:
    value = header_value.strip()
    if value.lower().startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):].strip()
    return value


class XsuaaBearerVerifier(IBearerTokenVerifier):
    def verify(self, token: str, credentials: SsoCredentials) -> Result[XsuaaPrincipal]:
        if not credentials.verificationkey:
            logger.error("Bearer token presented but the XSUAA binding has no verificationkey")
            return Return.err(
                Error("BEARER_VERIFICATION_UNAVAILABLE", "Token verification is not configured")
            )

        token = strip_bearer_prefix(token)
        if not token:
            return Return.err(Error("INVALID_BEARER_TOKEN", "Empty bearer token"))

        try:
            claims = jwt.decode(
                token,
                credentials.verificationkey,
                algorithms=["RS256"],
                audience=credentials.clientid,
                options={"require_aud": True, "require_exp": True},
            )
        except JWTError as exc:
            logger.info(f"Bearer token rejected: {exc}")
            return Return.err(Error("INVALID_BEARER_TOKEN", "Unauthorized - Invalid token"))

        if not (claims.get("user_name") or claims.get("sub")):
            return Return.err(Error("INVALID_BEARER_TOKEN", "Token carries no subject"))

        return Return.ok(XsuaaPrincipal.from_claims(claims))
