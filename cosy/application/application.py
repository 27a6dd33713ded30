"""
Framework Application Class
"""
import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from cosy.application.config import ApplicationConfig
from cosy.constants import (
    APP_ABSTRACT,
    APP_ALIASES,
    CONTAINER_ABSTRACT,
    CONTAINER_ALIASES,
    EMOJI,
)
from cosy.container import ServiceContainer
from cosy.events import EventEmitter
from cosy.exceptions import LifecycleError
from cosy.logging import getLogger
from cosy.service_provider import ServiceProvider

logger = getLogger('cosy.application')


class ApplicationState(Enum):
    """Lifecycle states, in the only order they may be entered"""
    CREATED = 0
    REGISTERED = 1
    BOOTED = 2
    RUNNING = 3
    SHUTTING_DOWN = 4
    SHUTDOWN = 5


@dataclass
class ServiceProviderRecord:
    provider: ServiceProvider
    booted: bool = False


async def _call_hook(hook):
    result = hook()
    if inspect.isawaitable(result):
        await result


class Application(EventEmitter):
    """
    Main application class - manages the framework lifecycle

    Owns the service container and the ordered list of service providers.

    Lifecycle events:
        provider-registered(provider), booting, booted, running,
        shutting-down, shutdown

    Example:
        app = Application(ApplicationConfig(name='demo', env='development'))
        app.register(RouteServiceProvider)
        await app.run()
        router = app.make('router')
        ...
        await app.shutdown()
    """

    def __init__(self, config: Optional[ApplicationConfig] = None):
        super().__init__()
        self._config = config or ApplicationConfig()
        self._container = ServiceContainer()
        self._records: List[ServiceProviderRecord] = []
        self.state = ApplicationState.CREATED
        self._boot_lock = asyncio.Lock()

        self.register_base_bindings()

        if self._config.debug:
            logger.debug(f"{EMOJI} [Application] Application created (debug mode)")

    def register_base_bindings(self):
        """Bind the application and its container under their well-known names"""
        self._container.instance(APP_ABSTRACT, self)
        self._container.instance(CONTAINER_ABSTRACT, self._container)

        for alias in APP_ALIASES:
            self._container.alias(alias, APP_ABSTRACT)
        for alias in CONTAINER_ALIASES:
            self._container.alias(alias, CONTAINER_ABSTRACT)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def register(self, provider_class: Type[ServiceProvider]) -> ServiceProvider:
        """
        Register a service provider

        The provider's register() runs immediately; any exception it raises
        propagates and aborts startup.

        Raises:
            LifecycleError: If the application has already booted
        """
        if self.state.value >= ApplicationState.BOOTED.value:
            raise LifecycleError(
                f"Cannot register {provider_class.__name__}: the application is already "
                f"{self.state.name.lower().replace('_', '-')}"
            )

        provider = provider_class(self)
        logger.debug(f"[Application] Registering service provider: {provider_class.__name__}")
        provider.register()

        self._records.append(ServiceProviderRecord(provider))
        self.state = ApplicationState.REGISTERED
        self.emit('provider-registered', provider)
        return provider

    async def boot(self):
        """
        Boot all service providers in registration order

        A no-op once booted. Overlapping calls boot once: later callers
        wait for the boot in progress. A failing boot hook propagates and
        leaves the application un-booted; providers booted before the
        failure are not booted again on retry.
        """
        async with self._boot_lock:
            if self.state.value >= ApplicationState.BOOTED.value:
                return

            logger.debug("[Application] Booting application")
            self.emit('booting')

            for record in self._records:
                if record.booted:
                    continue
                hook = getattr(record.provider, 'boot', None)
                if hook is not None:
                    logger.debug(
                        f"[Application] Booting service provider: {record.provider.__class__.__name__}"
                    )
                    await _call_hook(hook)
                record.booted = True

            self.state = ApplicationState.BOOTED
            self.emit('booted')
            logger.info(f"[Application] {self._config.name} booted")

    async def run(self):
        """Boot if needed and mark the application as running"""
        if self.state.value >= ApplicationState.RUNNING.value:
            return

        await self.boot()

        self.state = ApplicationState.RUNNING
        self.emit('running')

    async def shutdown(self):
        """
        Shut down service providers in reverse registration order

        Every provider gets a shutdown attempt: a failing hook is logged and
        the remaining providers are still shut down.
        """
        if self.state.value >= ApplicationState.SHUTTING_DOWN.value:
            return

        self.state = ApplicationState.SHUTTING_DOWN
        self._emit_logged('shutting-down')
        logger.debug("[Application] Shutting down application")

        for record in reversed(self._records):
            hook = getattr(record.provider, 'shutdown', None)
            if hook is None:
                continue
            name = record.provider.__class__.__name__
            logger.debug(f"[Application] Shutting down service provider: {name}")
            try:
                await _call_hook(hook)
            except Exception:
                logger.exception(f"[Application] Service provider {name} failed to shut down")

        self.state = ApplicationState.SHUTDOWN
        self._emit_logged('shutdown')
        logger.info(f"[Application] {self._config.name} shutdown complete")

    def _emit_logged(self, event: str):
        # Shutdown must reach every provider, so listener errors are only logged
        try:
            self.emit(event)
        except Exception:
            logger.exception(f"[Application] Listener for '{event}' failed")

    # =========================================================================
    # Container delegation
    # =========================================================================

    def container(self) -> ServiceContainer:
        """Get the service container"""
        return self._container

    def make(self, name: str) -> Any:
        """Resolve a service from the container"""
        return self._container.resolve(name)

    def bind(self, name: str, factory, singleton: bool = False):
        """Register a factory binding"""
        self._container.bind(name, factory, singleton)

    def singleton(self, name: str, factory):
        """Register a singleton binding"""
        self._container.singleton(name, factory)

    def instance(self, name: str, value: Any) -> Any:
        """Register an existing instance"""
        return self._container.instance(name, value)

    def alias(self, alias: str, canonical: str):
        """Alias a container name"""
        self._container.alias(alias, canonical)

    def bound(self, name: str) -> bool:
        """Check if a service is bound"""
        return self._container.has(name)

    # =========================================================================
    # Introspection
    # =========================================================================

    def config(self, key: Optional[str] = None) -> Any:
        """Get the application configuration, or one of its fields"""
        if key is not None:
            return getattr(self._config, key)
        return self._config

    def is_development(self) -> bool:
        return self._config.env == 'development'

    def is_production(self) -> bool:
        return self._config.env == 'production'

    def is_test(self) -> bool:
        return self._config.env == 'test'

    def is_booted(self) -> bool:
        return self.state.value >= ApplicationState.BOOTED.value

    def is_running(self) -> bool:
        return self.state == ApplicationState.RUNNING

    def user_data_path(self) -> Path:
        return self._config.user_data_path

    def providers(self) -> List[ServiceProvider]:
        """Registered providers, in registration order"""
        return [record.provider for record in self._records]

    def provider_records(self) -> List[ServiceProviderRecord]:
        return list(self._records)

    def deferred_services(self) -> Dict[str, str]:
        """Map of declared deferrable service names to their provider class name"""
        services = {}
        for record in self._records:
            for service in record.provider.provides():
                services[service] = record.provider.__class__.__name__
        return services

    def __repr__(self) -> str:
        return f"<Application {self._config.name} [{self.state.name}]>"
