"""
Custom exceptions for the GoFast run draft service.

Every exception carries:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging

Only hard failures are modelled here. A field that cannot be extracted
from the pasted text is not an error; it is simply left empty.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Run draft errors
    NO_SOURCE_INPUT = "NO_SOURCE_INPUT"
    RUN_GENERATION_FAILED = "RUN_GENERATION_FAILED"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    RUN_CLUB_NOT_FOUND = "RUN_CLUB_NOT_FOUND"


class GoFastError(Exception):
    """
    Base exception for all GoFast errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary (or message) with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Any = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API failure envelope."""
        result: Dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code.value,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(GoFastError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details,
        )


class NoSourceInputError(ValidationError):
    """Raised when a run draft is requested without any text or URL to read."""

    def __init__(self, message: str = "At least one source input is required") -> None:
        super().__init__(message=message)
        self.code = ErrorCode.NO_SOURCE_INPUT


# ============================================================================
# Authentication Errors (401)
# ============================================================================

class AuthenticationError(GoFastError):
    """Raised when the caller's ID token is missing or cannot be verified."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            message=message,
            code=ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(GoFastError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=details,
        )


class RunClubNotFoundError(NotFoundError):
    """Raised when a run club lookup by id or slug finds nothing."""

    def __init__(self, run_club_id: str) -> None:
        super().__init__(
            message=f"Run club not found: {run_club_id}",
            resource_type="run_club",
            resource_id=run_club_id,
        )
        self.code = ErrorCode.RUN_CLUB_NOT_FOUND


# ============================================================================
# Database Errors (500)
# ============================================================================

class DatabaseError(GoFastError):
    """Raised when the run club store fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=error_details,
        )


# ============================================================================
# Run generation errors (500)
# ============================================================================

class RunGenerationError(GoFastError):
    """Raised when run draft generation fails unexpectedly."""

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(
            message="Failed to generate run data",
            code=ErrorCode.RUN_GENERATION_FAILED,
            status_code=500,
            details=reason,
        )
