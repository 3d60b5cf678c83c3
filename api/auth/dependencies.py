"""FastAPI dependencies for authentication.

Provides:
- get_current_user_id: Resolve the bearer token to the acting user's id
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.auth.jwt import authenticate
from copydesk.logging import bind_context


# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UUID:
    """Extract and validate the current user id from the JWT token.

    Raises:
        AuthenticationError: Missing or invalid token (HTTP 401)

    Returns:
        UUID: Authenticated user id
    """
    user_id = authenticate(credentials.credentials if credentials else None)
    bind_context(user_id=user_id)
    return user_id
