"""
Base Middleware Class
Base class for class-based dispatch middleware
"""
from typing import Any, Dict, Optional, Tuple


class Middleware:
    """
    Base middleware class

    Instances are callables with the middleware signature
    ``(context, next, channel, *args)``, so they can be used anywhere a
    plain middleware function can.

    Middlewares can:
    - Inspect or reject a call before it reaches the handler (before_dispatch)
    - Inspect or replace the result afterwards (after_dispatch)
    - Take over the whole call by overriding handle()

    Configuration:
    Subclasses can set these class variables for from_config():
    - ENABLED_CONFIG_KEY: Config key to check if middleware is enabled
    - CONFIG_MAPPING: Dict mapping constructor params to (config key, default)
    - DEFAULT_ENABLED: Default enabled state if config key not found
    - STATIC_PARAMS: Static parameters that don't come from config
    """

    ENABLED_CONFIG_KEY: Optional[str] = None
    CONFIG_MAPPING: Dict[str, Tuple[str, Any]] = {}
    DEFAULT_ENABLED: bool = True
    STATIC_PARAMS: Dict[str, Any] = {}

    @classmethod
    def from_config(cls, config) -> Optional['Middleware']:
        """
        Create middleware instance from configuration

        Args:
            config: Anything with a dot-notation get(key, default), such as
                    the ConfigRepository

        Returns:
            Middleware instance if enabled, None otherwise
        """
        if cls.ENABLED_CONFIG_KEY and not config.get(cls.ENABLED_CONFIG_KEY, cls.DEFAULT_ENABLED):
            return None

        params = {
            name: config.get(key, default)
            for name, (key, default) in cls.CONFIG_MAPPING.items()
        }
        return cls(**{**params, **cls.STATIC_PARAMS})

    async def before_dispatch(self, context: Any, channel: str, args: Tuple[Any, ...]):
        """
        Called before the rest of the chain runs

        Raise to reject the call.
        """
        return None

    async def after_dispatch(self, context: Any, channel: str, args: Tuple[Any, ...], result: Any) -> Any:
        """
        Called with the result of the rest of the chain

        Returns:
            The result passed back to the caller
        """
        return result

    async def handle(self, context: Any, next, channel: str, *args) -> Any:
        await self.before_dispatch(context, channel, args)
        result = await next()
        return await self.after_dispatch(context, channel, args, result)

    def __call__(self, context: Any, next, channel: str, *args):
        return self.handle(context, next, channel, *args)
