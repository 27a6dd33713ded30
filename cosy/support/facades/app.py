"""
App Facade
Provides static access to the application
"""
from cosy.constants import APP_ABSTRACT
from cosy.support.facades.facade import Facade


class App(Facade):
    """
    Application Facade

    Example:
        # Get service from container
        router = App.make('router')

        # Check if service is bound
        if App.bound('cache'):
            cache = App.make('cache')

        # Register singleton
        App.singleton('clock', lambda container: Clock())
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return APP_ABSTRACT

    @classmethod
    def get_facade_root(cls):
        """Return the application itself instead of resolving it"""
        return cls.get_facade_application()
