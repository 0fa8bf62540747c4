"""
Base classes and utilities for the service layer.

Every domain service in the project returns a ``ServiceResult`` instead of
raising for expected failures (missing records, ownership checks, bad input).
Views translate the error code into an HTTP status with ``status_for``.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(listing)
        >>> if result.ok:
        ...     return Response(result.value, 200)

        >>> result = service_err("not_found", "Listing not found")
        >>> print(result.error)  # "not_found"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T = None) -> ServiceResult[T]:
    """Create a successful ServiceResult."""
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "not_found", "invalid_input")
        error_detail: Human-readable error message

    Returns:
        ServiceResult with ok=False and error information
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator
    - Error handling utilities

    Usage:
        class ListingService(BaseService):
            @BaseService.log_performance
            def list_listings(self, params):
                self.logger.info(f"Listing listings with params: {params}")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and the outcome of the returned ServiceResult.
        Exceptions are logged and re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper

    def wrap_exception(self, func: Callable, error_code: str = "internal_error") -> ServiceResult:
        """
        Execute a function and wrap any exception in a ServiceResult.

        Example:
            result = self.wrap_exception(lambda: Listing.objects.count())
        """
        try:
            value = func()
            return service_ok(value)
        except Exception as e:
            self.logger.error(f"Exception in {getattr(func, '__name__', 'callable')}: {str(e)}", exc_info=True)
            return service_err(error_code, str(e))


class ErrorCodes:
    """Standard error codes used across the domain services."""

    # Lookup errors
    NOT_FOUND = "not_found"
    USER_NOT_FOUND = "user_not_found"
    LISTING_NOT_FOUND = "listing_not_found"
    SHOP_NOT_FOUND = "shop_not_found"
    PRODUCT_NOT_FOUND = "product_not_found"
    CATEGORY_NOT_FOUND = "category_not_found"
    POST_NOT_FOUND = "post_not_found"
    RESERVATION_NOT_FOUND = "reservation_not_found"
    CONVERSATION_NOT_FOUND = "conversation_not_found"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"

    # Validation errors
    INVALID_INPUT = "invalid_input"
    INVALID_STATE = "invalid_state"
    DUPLICATE_REVIEW = "duplicate_review"
    PAID_PLAN_REQUIRES_CHECKOUT = "paid_plan_requires_checkout"

    # Conflicts
    CONFLICT = "conflict"

    # Internal errors
    INTERNAL_ERROR = "internal_error"


NOT_FOUND_CODES = {
    ErrorCodes.NOT_FOUND,
    ErrorCodes.USER_NOT_FOUND,
    ErrorCodes.LISTING_NOT_FOUND,
    ErrorCodes.SHOP_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_FOUND,
    ErrorCodes.CATEGORY_NOT_FOUND,
    ErrorCodes.POST_NOT_FOUND,
    ErrorCodes.RESERVATION_NOT_FOUND,
    ErrorCodes.CONVERSATION_NOT_FOUND,
}

BAD_REQUEST_CODES = {
    ErrorCodes.INVALID_INPUT,
    ErrorCodes.INVALID_STATE,
    ErrorCodes.DUPLICATE_REVIEW,
    ErrorCodes.PAID_PLAN_REQUIRES_CHECKOUT,
}


def status_for(error: Optional[str]) -> int:
    """Map a service error code to the HTTP status returned by the API."""
    if error in NOT_FOUND_CODES:
        return 404
    if error == ErrorCodes.PERMISSION_DENIED:
        return 403
    if error in BAD_REQUEST_CODES:
        return 400
    if error == ErrorCodes.CONFLICT:
        return 409
    return 500
