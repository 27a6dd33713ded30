"""
Service Providers
"""
from cosy.providers.config_service_provider import ConfigServiceProvider
from cosy.providers.logging_service_provider import LoggingServiceProvider
from cosy.providers.routing_service_provider import RoutingServiceProvider
from cosy.providers.http_service_provider import HttpServiceProvider

DEFAULT_PROVIDERS = [
    ConfigServiceProvider,
    LoggingServiceProvider,
    RoutingServiceProvider,
]

__all__ = [
    'ConfigServiceProvider',
    'LoggingServiceProvider',
    'RoutingServiceProvider',
    'HttpServiceProvider',
    'DEFAULT_PROVIDERS',
]
