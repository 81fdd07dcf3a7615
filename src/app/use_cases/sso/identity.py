from typing import Any, Dict

from src.libs.result import Error, Result, Return
from .dtos import ExternalIdentity

# Placeholder mailbox for identities the provider sends without an email claim
PLACEHOLDER_EMAIL_DOMAIN = "sap.xsuaa"


def derive_identity(claims: Dict[str, Any]) -> Result[ExternalIdentity]:
    """
    Derive subject, email and display name from identity token claims.

    Each field takes the first claim that is present:
        subject: sub, user_id
        email:   email, "{subject}@sap.xsuaa"
        name:    "{given_name} {family_name}", user_name, local part of email
    """
    subject = claims.get("sub") or claims.get("user_id")
    if not subject:
        return Return.err(
            Error("MISSING_SUBJECT", "Identity token carries neither sub nor user_id")
        )
    subject = str(subject)

    email = claims.get("email") or f"{subject}@{PLACEHOLDER_EMAIL_DOMAIN}"

    given_name = claims.get("given_name")
    if given_name:
        name = f"{given_name} {claims.get('family_name') or ''}".strip()
    else:
        name = claims.get("user_name") or email.split("@")[0]

    return Return.ok(ExternalIdentity(subject=subject, email=email, name=name))
