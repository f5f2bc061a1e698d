"""Exception types for the recommendation pipeline.

Only the client-facing errors (unknown subcategory, no products, missing user,
quota exhausted) reach API callers. Upstream and cache errors are raised inside
the services and recovered there by their fallbacks.
"""

from typing import Any


class ZokeyError(Exception):
    """Base exception for Zokey errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "SERVER_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}


class UnknownSubcategoryError(ZokeyError):
    """Raised when a subcategory id does not resolve in the catalog."""

    def __init__(self, subcategory_id: str):
        super().__init__(
            message=f"Subcategory not found: {subcategory_id}",
            status_code=404,
            code="NOT_FOUND",
            details={"subcategory_id": subcategory_id},
        )
        self.subcategory_id = subcategory_id


class NoProductsFoundError(ZokeyError):
    """Raised when retrieval yields nothing to rank."""

    def __init__(self, keywords: list[str] | None = None):
        super().__init__(
            message="No products found matching your criteria",
            status_code=404,
            code="NO_PRODUCTS",
            details={"keywords": keywords or []},
        )


class UserNotFoundError(ZokeyError):
    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            status_code=404,
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class SearchLimitReachedError(ZokeyError):
    def __init__(self, user_id: str):
        super().__init__(
            message="Free search limit reached. Please subscribe to continue.",
            status_code=403,
            code="LIMIT_REACHED",
            details={"user_id": user_id},
        )


class UpstreamTransportError(ZokeyError):
    """Network failure, timeout or non-2xx response from an external provider."""

    def __init__(self, provider: str, error: Exception | str):
        super().__init__(
            message=f"{provider} request failed: {error}",
            status_code=502,
            code="UPSTREAM_ERROR",
            details={
                "provider": provider,
                "error": str(error),
                "error_type": type(error).__name__ if isinstance(error, Exception) else "str",
            },
        )
        self.provider = provider


class MalformedProviderResponseError(ZokeyError):
    """Provider answered, but the payload does not match the expected shape."""

    def __init__(self, provider: str, reason: str):
        super().__init__(
            message=f"Malformed {provider} response: {reason}",
            status_code=502,
            code="MALFORMED_RESPONSE",
            details={"provider": provider, "reason": reason},
        )
        self.provider = provider
        self.reason = reason


class CacheUnavailableError(ZokeyError):
    """Cache store read or write failed."""

    def __init__(self, operation: str, error: Exception):
        super().__init__(
            message=f"Search cache {operation} failed: {error}",
            status_code=503,
            code="CACHE_UNAVAILABLE",
            details={"operation": operation, "error": str(error), "error_type": type(error).__name__},
        )
        self.operation = operation
