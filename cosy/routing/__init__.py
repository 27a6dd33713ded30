"""
Routing Package
"""
from cosy.routing.route import Route, RouteConfig, RouteGroup
from cosy.routing.router import Router, RouteRegistrar, RouteMatch
from cosy.routing.pipeline import MiddlewareChain, Next
from cosy.routing.route_middleware_registry import RouteMiddlewareRegistry

__all__ = [
    'Route',
    'RouteConfig',
    'RouteGroup',
    'Router',
    'RouteRegistrar',
    'RouteMatch',
    'MiddlewareChain',
    'Next',
    'RouteMiddlewareRegistry',
]
