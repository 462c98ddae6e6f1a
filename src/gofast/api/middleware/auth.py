"""Authentication dependency for FastAPI routes.

Every run draft request carries ``Authorization: Bearer <id token>``.
The token is verified by the AuthService; the route only ever sees the
resulting identity.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...exceptions import AuthenticationError
from ...services.auth_service import (
    AuthService,
    AuthServiceError,
    get_auth_service,
)


# Security scheme for Bearer token authentication
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Represents the currently authenticated caller.

    Attributes:
        user_id: Identity provider uid.
        email: Email claim, when the token carries one.
    """

    user_id: str
    email: Optional[str] = None


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """FastAPI dependency to get the current authenticated user.

    Raises:
        AuthenticationError: "Unauthorized" when no bearer token is sent,
            "Invalid token" when verification fails.
    """
    if credentials is None:
        raise AuthenticationError("Unauthorized")

    try:
        identity = auth_service.identify(credentials.credentials)
    except AuthServiceError:
        raise AuthenticationError("Invalid token")

    user = CurrentUser(user_id=identity.uid, email=identity.email)
    # Read by the rate limiter key function
    request.state.user = user
    return user
