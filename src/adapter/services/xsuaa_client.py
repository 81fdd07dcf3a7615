"""
XSUAA Token Client

Authorization-code exchange against the XSUAA token endpoint and decoding of
the returned identity token.

By default the identity token's claims are read without checking its
signature: the token comes straight back from a server-to-server TLS call to
the bound XSUAA instance. With verify_signature=True the token must carry a
valid RS256 signature by the instance's verificationkey.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from jose import JWTError, jwt

from src.app.services.credential_provider import SsoCredentials
from src.app.services.identity_exchange import IIdentityExchangeClient, TokenExchange
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class XsuaaTokenClient(IIdentityExchangeClient):
    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        verify_signature: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.verify_signature = verify_signature
        self.transport = transport

    async def exchange_code(
        self, code: str, redirect_uri: str, credentials: SsoCredentials
    ) -> Result[TokenExchange]:
        """
        Exchange an authorization code for tokens.

        The code is single-use; a failed exchange is never retried.

        Args:
            code: Authorization code from the callback
            redirect_uri: Callback URL used when initiating the login
            credentials: Bound XSUAA client credentials

        Returns:
            Result[TokenExchange], or Error(TOKEN_EXCHANGE_FAILED) /
            Error(MALFORMED_IDENTITY_TOKEN)
        """
        token_url = f"{credentials.url.rstrip('/')}/oauth/token"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.post(
                    token_url,
                    data={
                        "grant_type": "authorization_code",
                        "code": code,
                        "redirect_uri": redirect_uri,
                    },
                    auth=(credentials.clientid, credentials.clientsecret),
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            logger.error(f"Token exchange request to {token_url} failed: {exc!r}")
            return Return.err(
                Error("TOKEN_EXCHANGE_FAILED", "Token endpoint unreachable")
            )

        if not resp.is_success:
            logger.error(f"Token exchange failed ({resp.status_code}): {resp.text}")
            return Return.err(
                Error("TOKEN_EXCHANGE_FAILED", f"Token endpoint returned {resp.status_code}")
            )

        try:
            tokens: Dict[str, Any] = resp.json()
            if not isinstance(tokens, dict):
                raise ValueError("token response is not an object")
        except ValueError:
            logger.error("Token endpoint returned a non-JSON body")
            return Return.err(
                Error("TOKEN_EXCHANGE_FAILED", "Token endpoint returned an unreadable body")
            )

        id_token = tokens.get("id_token")
        if not isinstance(id_token, str) or not id_token:
            return Return.err(
                Error("MALFORMED_IDENTITY_TOKEN", "Token response carries no id_token")
            )

        claims = self._decode_claims(id_token, credentials)
        if claims is None:
            return Return.err(
                Error("MALFORMED_IDENTITY_TOKEN", "Identity token could not be decoded")
            )

        try:
            expires_in = int(tokens["expires_in"]) if tokens.get("expires_in") is not None else None
        except (TypeError, ValueError):
            expires_in = None

        return Return.ok(
            TokenExchange(
                access_token=tokens.get("access_token"),
                refresh_token=tokens.get("refresh_token"),
                id_token_claims=claims,
                expires_in=expires_in,
                scope=tokens.get("scope"),
            )
        )

    def _decode_claims(
        self, id_token: str, credentials: SsoCredentials
    ) -> Optional[Dict[str, Any]]:
        try:
            if self.verify_signature and credentials.verificationkey:
                return jwt.decode(
                    id_token,
                    credentials.verificationkey,
                    algorithms=["RS256"],
                    audience=credentials.clientid,
                    options={"verify_at_hash": False},
                )
            claims = jwt.get_unverified_claims(id_token)
        except JWTError as exc:
            logger.error(f"Rejecting identity token: {exc}")
            return None

        if not isinstance(claims, dict):
            return None
        return claims
