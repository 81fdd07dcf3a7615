import secrets
import string
from datetime import UTC, datetime

ID_ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 32


def generate_id(length: int = ID_LENGTH) -> str:
    """Opaque alphanumeric identifier from a CSPRNG. Used for row ids and session tokens."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def utcnow() -> datetime:
    # Columns are naive DateTime; keep everything in naive UTC
    return datetime.now(UTC).replace(tzinfo=None)
