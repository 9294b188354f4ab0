# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a
# suggestion telling the client how to recover.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class BlinnoException(Exception):
    """
    Base exception for the BLINNO API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "BLINNO_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Entitlement Exceptions
# =============================================================================

class LimitReachedError(BlinnoException):
    """Raised when a user's plan doesn't allow another resource of a kind."""

    def __init__(self, resource: str, limit: int, current_count: int):
        plural = f"{resource}s"
        super().__init__(
            message=(
                f"{resource.capitalize()} limit reached. "
                f"Your plan allows {limit} {plural}."
            ),
            code=f"{resource.upper()}_LIMIT_REACHED",
            status_code=403,
            suggestion=f"Upgrade your subscription to create more {plural}",
            details={
                "resource": resource,
                "limit": limit,
                "current_count": current_count,
            }
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class ResourceNotFoundError(BlinnoException):
    """Raised when a product, portfolio or tip doesn't exist."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource.capitalize()} not found: {resource_id}",
            code=f"{resource.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource} id is correct",
            details={f"{resource}_id": resource_id}
        )


class ResourceForbiddenError(BlinnoException):
    """Raised when a user modifies a resource they don't own."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"You don't own this {resource}",
            code="FORBIDDEN",
            status_code=403,
            details={f"{resource}_id": resource_id}
        )


class CreatorNotFoundError(BlinnoException):
    """Raised when a tip targets a user that doesn't exist."""

    def __init__(self, creator_id: str):
        super().__init__(
            message=f"Creator not found: {creator_id}",
            code="CREATOR_NOT_FOUND",
            status_code=404,
            suggestion="Check the creator_id of the profile you are tipping",
            details={"creator_id": creator_id}
        )


# =============================================================================
# Billing Exceptions
# =============================================================================

class InvalidAmountError(BlinnoException):
    """Raised when a monetary amount is missing, malformed or not positive."""

    def __init__(self, amount: Any):
        super().__init__(
            message=f"Amount must be greater than 0, got: {amount}",
            code="INVALID_AMOUNT",
            status_code=400,
            suggestion="Send a positive number, e.g. 1500 or \"12.50\"",
            details={"amount": str(amount)}
        )


class UnknownTransactionTypeError(BlinnoException):
    """Raised when a fee is requested for an unsupported transaction type."""

    def __init__(self, transaction_type: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown transaction type: {transaction_type}",
            code="UNKNOWN_TRANSACTION_TYPE",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"transaction_type": transaction_type, "allowed": allowed}
        )


class SubscriptionNotFoundError(BlinnoException):
    """Raised when an operation needs a subscription row and there is none."""

    def __init__(self, user_id: str):
        super().__init__(
            message="No active subscription found",
            code="SUBSCRIPTION_NOT_FOUND",
            status_code=404,
            suggestion="Choose a plan first via the subscriptions page",
            details={"user_id": user_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def blinno_exception_handler(
    request: Request,
    exc: BlinnoException
) -> JSONResponse:
    """
    Convert BlinnoException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def database_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Convert a SupabaseClientError into a 502 response."""
    content = {
        "detail": "The database request failed",
        "code": "DATABASE_ERROR",
    }
    suggestion = getattr(exc, "suggestion", None)
    if suggestion:
        content["suggestion"] = suggestion
    return JSONResponse(status_code=502, content=content)
