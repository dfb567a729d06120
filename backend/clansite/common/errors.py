"""
Error Definitions

Defines custom exception classes used in the application for unified error handling.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Whether extra details are included

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if include_details and self.details:
            result["error"]["details"] = self.details
        return result


class UnauthorizedError(AppError):
    """
    Unauthorized Error

    Raised when a protected route is called without a structurally valid session token.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "unauthorized",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="authentication_error",
            code=code,
            details=details,
            status_code=401,
        )


class AuthFailedError(AppError):
    """
    Login Failure

    Raised when username or password do not match the credential record.
    The message never tells which of the two was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        code: str = "invalid_credentials",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="authentication_error",
            code=code,
            details=details,
            status_code=401,
        )


class ValidationError(AppError):
    """
    Parameter Validation Error

    Raised when the request payload is malformed.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "validation_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=422,
        )


class StorageUnavailableError(AppError):
    """
    Storage Unavailable Error

    Raised when the KV backend fails or does not answer within the I/O timeout.
    Distinct from a missing key, which is not an error.
    """

    def __init__(
        self,
        message: str = "Storage unavailable",
        code: str = "storage_unavailable",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="storage_error",
            code=code,
            details=details,
            status_code=503,
        )


class ServiceError(AppError):
    """
    Service Error

    Raised when the service is misconfigured (e.g., admin credentials missing).
    """

    def __init__(
        self,
        message: str = "Service error",
        code: str = "service_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="service_error",
            code=code,
            details=details,
            status_code=500,
        )
