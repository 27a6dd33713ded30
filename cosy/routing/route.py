"""
Route Class
Represents a single channel with fluent API (Laravel-style)
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from cosy.validation import ValidationRule, normalize_rules

if TYPE_CHECKING:
    from cosy.routing.router import Router


@dataclass
class RouteConfig:
    """Everything the router needs to dispatch one channel"""
    channel: str
    handler: Callable[..., Any]
    middleware: List[Any] = field(default_factory=list)
    validation: Dict[Any, ValidationRule] = field(default_factory=dict)
    description: Optional[str] = None
    group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'channel': self.channel,
            'handler': getattr(self.handler, '__name__', 'Closure'),
            'middleware': [_middleware_name(m) for m in self.middleware],
            'validation': sorted(str(key) for key in self.validation),
            'description': self.description,
            'group': self.group,
        }


@dataclass
class RouteGroup:
    """
    Scoping context for routes registered inside Router.group()

    Not dispatchable. Groups with a name are recorded on the router.
    """
    prefix: str = ''
    middleware: List[Any] = field(default_factory=list)
    name: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def make(cls, config: Any) -> 'RouteGroup':
        """Build a group from a prefix string, a dict or a RouteGroup"""
        if isinstance(config, cls):
            return config
        if config is None:
            return cls()
        if isinstance(config, str):
            return cls(prefix=config)
        if isinstance(config, dict):
            return cls(
                prefix=config.get('prefix', ''),
                middleware=list(config.get('middleware', [])),
                name=config.get('name'),
                description=config.get('description'),
            )
        raise TypeError(f"Route group must be a prefix, dict or RouteGroup, got {type(config).__name__}")


def _middleware_name(middleware: Any) -> str:
    if isinstance(middleware, str):
        return middleware
    return getattr(middleware, '__name__', middleware.__class__.__name__)


class Route:
    """
    Route builder with fluent API

    Usage:
        Route.handle('ping', handler)
            .middleware(auth)
            .validation({0: {'required': True, 'type': 'string'}})
            .description('Health check')

    The builder edits the RouteConfig the router holds, so changes made
    after registration are seen by the next dispatch.
    """

    def __init__(self, channel: str, handler: Callable[..., Any], router: Optional['Router'] = None):
        if not callable(handler):
            raise TypeError(f"Handler for route [{channel}] must be callable")
        self.config = RouteConfig(channel=channel, handler=handler)
        self._router = router

    def middleware(self, *middleware) -> 'Route':
        """Append route middleware (callables or registered middleware names)"""
        self.config.middleware.extend(middleware)
        return self

    def validation(self, rules: Dict[Any, Any]) -> 'Route':
        """
        Merge validation rules, keyed by argument index

        Example:
            route.validation({0: {'required': True}, '1': ValidationRule(type='number')})
        """
        self.config.validation.update(normalize_rules(rules))
        return self

    def description(self, description: str) -> 'Route':
        self.config.description = description
        return self

    def group(self, group: str) -> 'Route':
        self.config.group = group
        return self

    def prefix(self, prefix: str) -> 'Route':
        """
        Prepend a prefix to the channel (no separator is inserted)

        If the route is already registered its router entry is re-keyed.

        Raises:
            RegistrationError: If the prefixed channel is already taken
        """
        old_channel = self.config.channel
        new_channel = f"{prefix}{old_channel}"

        if self._router is not None and self._router.get_route(old_channel) is self.config:
            self._router.rename(old_channel, new_channel)
        else:
            self.config.channel = new_channel
        return self

    def name(self, name: str) -> 'Route':
        """Record a route name, kept in the description as '(Name: x)'"""
        if self.config.description:
            self.config.description = f"{self.config.description} (Name: {name})"
        else:
            self.config.description = f"(Name: {name})"
        return self

    def get_config(self) -> RouteConfig:
        return self.config

    def get_channel(self) -> str:
        return self.config.channel

    # =========================================================================
    # Detached builders
    # =========================================================================

    @classmethod
    def handle(cls, channel: str, handler: Callable[..., Any]) -> 'Route':
        """Create a route that is not yet registered on any router"""
        return cls(channel, handler)

    get = handle
    post = handle
    put = handle
    delete = handle

    def __repr__(self) -> str:
        return f"<Route {self.config.channel}>"
