"""
Service Provider Base Class
Laravel-style service providers for registering services and bootstrapping
"""
from abc import ABC, abstractmethod
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from cosy.application import Application


class ServiceProvider(ABC):
    """
    Base Service Provider class

    Service providers are the central place for application bootstrapping.
    They handle:
    - Registering services in the container (register)
    - Initialisation that needs other services (boot)
    - Releasing resources when the application stops (shutdown)

    ``boot`` and ``shutdown`` are optional and may be plain methods or
    coroutines.
    """

    def __init__(self, app: 'Application'):
        self.app = app

    @abstractmethod
    def register(self):
        """
        Register services in the container
        Called as soon as the provider is registered (before booting).
        Must only bind services: other providers may not be registered yet.

        Example:
            self.app.singleton('cache', lambda container: {})
            self.app.bind('clock', lambda container: Clock())
        """

    def provides(self) -> List[str]:
        """
        Services this provider offers

        A non-empty list marks the provider as deferrable. The list is
        informational: the provider is still registered eagerly.
        """
        return []

    def is_deferred(self) -> bool:
        """Whether the provider declares deferrable services"""
        return len(self.provides()) > 0

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
