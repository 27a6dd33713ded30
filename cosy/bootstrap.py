"""
Application Bootstrap
"""
from typing import Optional

from cosy.application import Application, ApplicationConfig
from cosy.constants import ROUTER_ABSTRACT
from cosy.dispatch import DispatchBoundary
from cosy.logging import getLogger
from cosy.providers import DEFAULT_PROVIDERS
from cosy.support.facades import Facade

logger = getLogger('cosy.bootstrap')


async def create_app(config: Optional[ApplicationConfig] = None) -> Application:
    """
    Create, wire and boot an application

    Steps:
    1. Create the Application and hand it to the facades
    2. Register the default providers (config, logging, routing)
    3. Register the providers listed in the config
    4. Add the configured global middleware to the router
    5. Boot

    Example:
        app = await create_app(ApplicationConfig(
            name='notes',
            env='development',
            providers=[NotesServiceProvider],
            middleware=[LoggingMiddleware()],
        ))
    """
    config = config or ApplicationConfig.from_env()
    app = Application(config)
    Facade.set_facade_application(app)
    Facade.clear_resolved_instances()

    for provider_class in [*DEFAULT_PROVIDERS, *config.providers]:
        app.register(provider_class)

    if config.middleware:
        app.make(ROUTER_ABSTRACT).middleware(*config.middleware)

    await app.boot()
    logger.debug(f"[Bootstrap] {config.name} ready with {len(app.providers())} providers")
    return app


def setup_dispatch(app: Application) -> DispatchBoundary:
    """
    Bind the dispatch boundary ('dispatcher') and return it

    Example:
        dispatcher = setup_dispatch(app)
        envelope = await dispatcher.handle('notes:list', [])
    """
    return DispatchBoundary.for_app(app)
