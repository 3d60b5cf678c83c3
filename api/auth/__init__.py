"""Authentication module for the API."""

from api.auth.jwt import (
    authenticate,
    create_access_token,
    verify_token,
)
from api.auth.dependencies import get_current_user_id

__all__ = [
    # JWT
    "authenticate",
    "create_access_token",
    "verify_token",
    # Dependencies
    "get_current_user_id",
]
