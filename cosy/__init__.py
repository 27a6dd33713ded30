"""
Framework Package
Export commonly used classes and helpers for easy import
"""
from cosy.application import Application, ApplicationConfig, ApplicationState
from cosy.bootstrap import create_app, setup_dispatch
from cosy.dispatch import DispatchBoundary, DispatchContext
from cosy.helpers import app, config, logger
from cosy.routing import Route, Router
from cosy.service_provider import ServiceProvider

__version__ = '0.1.0'

__all__ = [
    'Application',
    'ApplicationConfig',
    'ApplicationState',
    'create_app',
    'setup_dispatch',
    'DispatchBoundary',
    'DispatchContext',
    'Route',
    'Router',
    'ServiceProvider',
    'app',
    'config',
    'logger',
]
