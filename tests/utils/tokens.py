import time
from functools import lru_cache
from typing import Any, Dict, Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwt


def rsa_key_pair(name: str = "xsuaa") -> Tuple[str, str]:
    """(private PEM, public PEM); one pair per name per test run"""
    return _rsa_key_pair(name)


@lru_cache(maxsize=None)
def _rsa_key_pair(name: str) -> Tuple[str, str]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


def signed_token(claims: Dict[str, Any], key_name: str = "xsuaa", expires_in: int = 600) -> str:
    private_pem, _ = rsa_key_pair(key_name)
    now = int(time.time())
    payload = {"iat": now, "exp": now + expires_in, **claims}
    return jwt.encode(payload, private_pem, algorithm="RS256")


def access_token_claims(clientid: str, xsappname: str, **overrides) -> Dict[str, Any]:
    claims = {
        "sub": "a1b2c3d4-sap-user",
        "user_name": "jane.doe@acme.com",
        "email": "jane.doe@acme.com",
        "given_name": "Jane",
        "family_name": "Doe",
        "cid": clientid,
        "aud": [clientid, "openid"],
        "scope": ["openid", f"{xsappname}.Read"],
    }
    claims.update(overrides)
    return claims
