"""ID token verification for API callers.

Production tokens are Firebase ID tokens (RS256, signed with Google's
rotating keys). For local development and tests the service issues and
verifies HS256 tokens signed with a shared secret instead.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Optional

import jwt
from pydantic import BaseModel

from ..config import get_settings


FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


class VerifiedIdentity(BaseModel):
    """Caller identity taken from a verified ID token."""

    uid: str
    email: Optional[str] = None


class AuthServiceError(Exception):
    """Base exception for auth service errors."""

    pass


class TokenExpiredError(AuthServiceError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(AuthServiceError):
    """Raised when a token is invalid."""

    pass


class AuthService:
    """Verifies bearer tokens and turns them into caller identities."""

    def __init__(self) -> None:
        """Initialize auth service with settings."""
        settings = get_settings()
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._firebase_project_id = settings.firebase_project_id
        self._jwks_client: Optional[jwt.PyJWKClient] = None
        if self._firebase_project_id:
            self._jwks_client = jwt.PyJWKClient(settings.firebase_jwks_url)

    @property
    def uses_firebase(self) -> bool:
        return bool(self._firebase_project_id)

    def create_id_token(
        self,
        uid: str,
        email: Optional[str] = None,
        expires_in_minutes: int = 60,
    ) -> str:
        """Issue a locally signed ID token.

        Only meaningful when Firebase verification is not configured.

        Args:
            uid: The caller's user id.
            email: Optional email claim.
            expires_in_minutes: Token lifetime.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": uid,
            "iat": now,
            "exp": now + timedelta(minutes=expires_in_minutes),
        }
        if email:
            payload["email"] = email
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify_id_token(self, token: str) -> dict[str, Any]:
        """Verify and decode an ID token.

        Args:
            token: The bearer token string.

        Returns:
            Decoded token claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the signature, audience or issuer is wrong,
                or the token has no subject.
        """
        try:
            if self._jwks_client is not None:
                signing_key = self._jwks_client.get_signing_key_from_jwt(token)
                payload = jwt.decode(
                    token,
                    signing_key.key,
                    algorithms=["RS256"],
                    audience=self._firebase_project_id,
                    issuer=f"{FIREBASE_ISSUER_PREFIX}{self._firebase_project_id}",
                )
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        if not payload.get("sub"):
            raise InvalidTokenError("Token has no subject")
        return payload

    def identify(self, token: str) -> VerifiedIdentity:
        """Verify a token and return who it belongs to."""
        payload = self.verify_id_token(token)
        return VerifiedIdentity(
            uid=payload.get("user_id") or payload["sub"],
            email=payload.get("email"),
        )


@lru_cache
def get_auth_service() -> AuthService:
    """Get or create the AuthService instance."""
    return AuthService()
