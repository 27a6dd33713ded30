"""
Framework Helper Functions
Centralized user-facing helpers for easy access throughout the application
"""
from typing import Any, Optional


def app(name: Optional[str] = None) -> Any:
    """
    Get the application or resolve a service from it

    Example:
        app()
        app('router')
    """
    from cosy.support.facades import App

    application = App.get_facade_application()
    if name is None:
        return application
    return application.make(name)


def config(key: Optional[str] = None, default: Any = None) -> Any:
    """
    Get a configuration value, or the repository itself

    Example:
        config('app.name')
        config('rate_limit.max_requests', 100)
    """
    from cosy.support.facades import Config

    if key is None:
        return Config.get_facade_root()
    return Config.get(key, default)


def logger(channel: Optional[str] = None):
    """
    Get a log channel

    Example:
        logger('dispatch').info('ready')
    """
    from cosy.support.facades import Log

    return Log.channel(channel)
