"""
Exceptions Package
Centralized error handling and reporting
"""
from cosy.exceptions.custom import (
    FrameworkException,
    RegistrationError,
    ResolutionError,
    ValidationError,
    RouteNotFoundError,
    HandlerError,
    UnsafeResultError,
    FacadeError,
    LifecycleError,
    UnauthorizedException,
    ForbiddenException,
    TooManyRequestsException,
    DeadlineExceededError,
)
from cosy.exceptions.error_handler import ErrorHandler

__all__ = [
    # Error handling
    'ErrorHandler',

    # Custom exceptions
    'FrameworkException',
    'RegistrationError',
    'ResolutionError',
    'ValidationError',
    'RouteNotFoundError',
    'HandlerError',
    'UnsafeResultError',
    'FacadeError',
    'LifecycleError',
    'UnauthorizedException',
    'ForbiddenException',
    'TooManyRequestsException',
    'DeadlineExceededError',
]
