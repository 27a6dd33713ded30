"""
Facade System
Laravel-style facade pattern for static-like access to services
"""
from typing import Any, Dict, Optional, Type

from cosy.exceptions import FacadeError, ResolutionError

# Global application instance storage
_app_instance: Optional[Any] = None

# Resolved facade roots, keyed by accessor (shared by every facade)
_resolved_instances: Dict[str, Any] = {}


class FacadeMeta(type):
    """Metaclass for Facade to proxy unknown class attributes to the facade root"""

    def __getattr__(cls, name: str) -> Any:
        """
        Magic method to proxy attribute/method access to the facade root

        Private and dunder names are never proxied, so introspection
        (copy, pickle, pytest collection) sees a plain class.
        """
        if name.startswith('_'):
            raise AttributeError(name)

        instance = cls.get_facade_root()
        try:
            return getattr(instance, name)
        except AttributeError:
            raise FacadeError(
                f"Method {name} does not exist on '{cls.get_facade_accessor()}'"
            ) from None


class Facade(metaclass=FacadeMeta):
    """
    Base Facade class

    Provides Laravel-style static access to underlying service instances.
    Subclasses must implement get_facade_accessor() to specify which
    service to resolve from the application container.

    Example:
        class Window(Facade):
            @classmethod
            def get_facade_accessor(cls):
                return 'window.manager'

        # Usage:
        Window.open('settings')

    Roots are cached per accessor until clear_resolved_instance() is
    called, so swapping a container binding needs a cache clear as well.
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        """
        Get the accessor name for the facade

        Returns:
            Service name to resolve from container

        Raises:
            FacadeError: Must be implemented by subclasses
        """
        raise FacadeError(f"Facade {cls.__name__} does not implement get_facade_accessor()")

    @classmethod
    def get_facade_root(cls) -> Any:
        """
        Get the root object behind the facade

        Raises:
            FacadeError: If the application is not set or the accessor cannot be resolved
        """
        accessor = cls.get_facade_accessor()
        if not accessor:
            raise FacadeError("A facade root has not been set.")

        if accessor in _resolved_instances:
            return _resolved_instances[accessor]

        app = cls.get_facade_application()
        try:
            instance = app.make(accessor)
        except ResolutionError as e:
            raise FacadeError(f"Facade {cls.__name__} cannot resolve [{accessor}]: {e.message}") from e

        _resolved_instances[accessor] = instance
        return instance

    @classmethod
    def call_static(cls, method: str, *args, **kwargs) -> Any:
        """
        Call a method on the facade root

        Raises:
            FacadeError: If the root has no such method
        """
        instance = cls.get_facade_root()
        target = getattr(instance, method, None)

        if not callable(target):
            raise FacadeError(
                f"Method {method} does not exist on '{cls.get_facade_accessor()}'"
            )

        return target(*args, **kwargs)

    # =========================================================================
    # Application
    # =========================================================================

    @classmethod
    def set_facade_application(cls, app: Any):
        """Set the application instance (called during bootstrap)"""
        global _app_instance
        _app_instance = app

    @classmethod
    def get_facade_application(cls) -> Any:
        """
        Get the application instance

        Raises:
            FacadeError: If no application has been set
        """
        if _app_instance is None:
            raise FacadeError("Application has not been set.")
        return _app_instance

    @classmethod
    def get_app(cls) -> Optional[Any]:
        """Get the application instance or None"""
        return _app_instance

    # =========================================================================
    # Test helpers
    # =========================================================================

    @classmethod
    def clear_resolved_instance(cls, name: str):
        _resolved_instances.pop(name, None)

    @classmethod
    def clear_resolved_instances(cls):
        _resolved_instances.clear()

    @classmethod
    def swap(cls, instance: Any):
        """
        Replace the facade root, e.g. with a fake in a test

        Example:
            Log.swap(FakeLogManager())
        """
        _resolved_instances[cls.get_facade_accessor()] = instance

    @classmethod
    def reset(cls):
        """Forget the application and every resolved root"""
        global _app_instance
        _app_instance = None
        _resolved_instances.clear()


class FacadeProxy:
    """
    Object form of a facade, built by create_facade()

    Methods defined on the base Facade class are returned bound to the
    facade class; any other name becomes a call through call_static().
    """

    def __init__(self, facade_class: Type[Facade]):
        self._facade_class = facade_class

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)

        # Looked up in the class dicts; getattr on Facade would reach FacadeMeta.__getattr__
        if any(name in vars(klass) for klass in Facade.__mro__):
            return getattr(self._facade_class, name)

        facade_class = self._facade_class

        def forward(*args, **kwargs):
            return facade_class.call_static(name, *args, **kwargs)

        forward.__name__ = name
        return forward

    def __repr__(self) -> str:
        return f"<FacadeProxy {self._facade_class.__name__}>"


def create_facade(facade_class: Type[Facade]) -> FacadeProxy:
    """
    Create a proxy object for a facade class

    Example:
        Settings = create_facade(SettingsFacade)
        Settings.get('theme')
    """
    return FacadeProxy(facade_class)
