"""
Custom Exception Classes
Framework-specific exceptions with status codes
"""
from typing import Optional, List


class FrameworkException(Exception):
    """Base exception for all framework exceptions"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class RegistrationError(FrameworkException):
    """
    Registration error

    Raised when a channel is registered twice

    Example:
        raise RegistrationError("Route [ping] has already been registered.")
    """
    status_code = 409
    message = "Registration failed"


class ResolutionError(FrameworkException):
    """
    Resolution error

    Raised when a container key (or middleware name) cannot be resolved
    """
    status_code = 500
    message = "Unable to resolve binding"

    def __init__(self, message: Optional[str] = None, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class ValidationError(FrameworkException):
    """
    Validation error

    Raised when dispatch arguments fail their validation rules.
    Holds every failing rule message, not only the first one.

    Example:
        raise ValidationError(["Argument 0 is required"])
    """
    status_code = 422
    message = "Validation failed"

    def __init__(self, errors: Optional[List[str]] = None, message: Optional[str] = None):
        self.errors = list(errors or [])
        super().__init__(message or (', '.join(self.errors) if self.errors else None))


class RouteNotFoundError(FrameworkException):
    """
    Route not found

    Raised when a dispatch targets an unknown channel
    """
    status_code = 404
    message = "Route not found"

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"Route [{channel}] not found")


class HandlerError(FrameworkException):
    """
    Handler error

    Wraps any non-framework exception raised inside a middleware or handler.
    The original exception is kept as ``original`` and ``__cause__``.
    """
    status_code = 500
    message = "Unknown error"

    def __init__(self, channel: str, original: BaseException):
        self.channel = channel
        self.original = original
        super().__init__(str(original) or original.__class__.__name__)


class UnsafeResultError(FrameworkException):
    """
    Unsafe result

    Raised by the dispatch boundary when a handler returns data that cannot
    cross the transport (live handles, cycles, non-string keys, ...)
    """
    status_code = 500
    message = (
        "Handler returned data that cannot be transported "
        "(functions, class instances, live handles or cyclic structures); "
        "return plain data only"
    )

    def __init__(self, channel: str, reason: Optional[str] = None):
        self.channel = channel
        self.reason = reason
        super().__init__()


class FacadeError(FrameworkException, RuntimeError):
    """
    Facade wiring error

    Facade errors are programmer errors: they are raised synchronously and
    never converted into an error envelope.
    """
    status_code = 500
    message = "A facade root has not been set."


class LifecycleError(FrameworkException):
    """Raised when an operation is not allowed in the current application state"""
    status_code = 500
    message = "Operation not allowed in the current application state"


class UnauthorizedException(FrameworkException):
    """
    Unauthorized exception

    Raised when authentication is required but not provided

    Example:
        raise UnauthorizedException("Please log in")
    """
    status_code = 401
    message = "Authentication required"


class ForbiddenException(FrameworkException):
    """
    Forbidden exception

    Raised when the caller lacks a required permission
    """
    status_code = 403
    message = "Access forbidden"


class TooManyRequestsException(FrameworkException):
    """
    Too many requests exception

    Raised when rate limit is exceeded

    Example:
        raise TooManyRequestsException("Rate limit exceeded, try again later")
    """
    status_code = 429
    message = "Too many requests"


class DeadlineExceededError(FrameworkException):
    """Raised when a dispatch does not complete before its deadline"""
    status_code = 504
    message = "Deadline exceeded"

    def __init__(self, channel: str, seconds: float):
        self.channel = channel
        self.seconds = seconds
        super().__init__(f"Route [{channel}] did not complete within {seconds:g}s")
