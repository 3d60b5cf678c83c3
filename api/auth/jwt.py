"""JWT token utilities for authentication."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

from jose import JWTError, jwt

from copydesk import config
from copydesk.exceptions import AuthenticationError

# JWT_SECRET is REQUIRED in all environments
JWT_SECRET = config.JWT_SECRET
if not JWT_SECRET:
    raise RuntimeError(
        "JWT_SECRET environment variable is required. "
        "Set it to a secure random string (e.g., openssl rand -hex 32)"
    )
JWT_ALGORITHM = config.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = 30

# Valid token types for API access
VALID_ACCESS_TOKEN_TYPES = ("access",)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Payload data (should include 'sub' for user_id)
        expires_delta: Lifetime override (default ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update(
        {
            "exp": expire,
            "iat": now,
            "type": "access",
            "jti": str(uuid4()),
        }
    )
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Verify and decode a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict if valid, None if invalid/expired
    """
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def authenticate(credential: Optional[str]) -> UUID:
    """Resolve a bearer credential to the authenticated user id.

    Raises:
        AuthenticationError: Missing, invalid or expired credential
    """
    if not credential:
        raise AuthenticationError("Missing authentication credentials")

    payload = verify_token(credential)
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type", "access") not in VALID_ACCESS_TOKEN_TYPES:
        raise AuthenticationError("Invalid token type for this endpoint")

    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        raise AuthenticationError("Invalid token payload")
