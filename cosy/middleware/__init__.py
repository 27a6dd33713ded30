"""
Middleware Package
"""
from cosy.middleware.base_middleware import Middleware
from cosy.middleware.logging_middleware import LoggingMiddleware
from cosy.middleware.rate_limit_middleware import RateLimitMiddleware
from cosy.middleware.deadline_middleware import DeadlineMiddleware
from cosy.middleware.auth_middleware import (
    AuthContext,
    AuthMiddleware,
    JwtAuthenticator,
    default_authenticator,
    optional_auth,
    require_permissions,
)

__all__ = [
    'Middleware',
    'LoggingMiddleware',
    'RateLimitMiddleware',
    'DeadlineMiddleware',
    'AuthContext',
    'AuthMiddleware',
    'JwtAuthenticator',
    'default_authenticator',
    'optional_auth',
    'require_permissions',
]
