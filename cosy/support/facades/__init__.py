"""
Facades Package
Laravel-style facades for static access to services
"""
from cosy.support.facades.facade import Facade, FacadeMeta, FacadeProxy, create_facade
from cosy.support.facades.app import App
from cosy.support.facades.route import Route
from cosy.support.facades.config import Config
from cosy.support.facades.log import Log

__all__ = [
    'Facade',
    'FacadeMeta',
    'FacadeProxy',
    'create_facade',
    'App',
    'Route',
    'Config',
    'Log',
]
