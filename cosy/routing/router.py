"""
Router
Main routing class that manages channel registration and dispatch
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from cosy.exceptions import (
    FrameworkException,
    HandlerError,
    RegistrationError,
    RouteNotFoundError,
)
from cosy.logging import getLogger
from cosy.routing.pipeline import MiddlewareChain
from cosy.routing.route import Route, RouteConfig, RouteGroup
from cosy.routing.route_middleware_registry import RouteMiddlewareRegistry
from cosy.validation import Validator

logger = getLogger('cosy.routing')

GroupConfig = Union[str, Dict[str, Any], RouteGroup]


@dataclass
class RouteMatch:
    """Result of a route lookup. Lookup is exact, so params stays empty."""
    route: RouteConfig
    params: Dict[str, str] = field(default_factory=dict)


class RouteRegistrar:
    """
    Registers routes inside a group

    Routes created here get the group prefix prepended to their channel
    and the group middleware placed before their own.

    Usage:
        def users(group):
            group.get('list', list_users)
            group.group('admin:', lambda admin: admin.post('ban', ban_user))

        router.group({'prefix': 'users:', 'middleware': [auth]}, users)
    """

    def __init__(self, router: 'Router', group: Optional[RouteGroup] = None):
        self.router = router
        group = group or RouteGroup()
        self._prefix = group.prefix
        self._middleware = list(group.middleware)
        self._name = group.name

    def prefix(self, prefix: str) -> 'RouteRegistrar':
        """Extend the group prefix for routes registered afterwards"""
        self._prefix = f"{self._prefix}{prefix}"
        return self

    def middleware(self, *middleware) -> 'RouteRegistrar':
        """Add group middleware for routes registered afterwards"""
        self._middleware.extend(middleware)
        return self

    def name(self, name: str) -> 'RouteRegistrar':
        """Name the group; routes registered afterwards are tagged with it"""
        self._name = name
        self.router.add_group(RouteGroup(prefix=self._prefix, middleware=list(self._middleware), name=name))
        return self

    def get(self, channel: str, handler: Callable[..., Any]) -> Route:
        return self.handle(channel, handler)

    def post(self, channel: str, handler: Callable[..., Any]) -> Route:
        return self.handle(channel, handler)

    def put(self, channel: str, handler: Callable[..., Any]) -> Route:
        return self.handle(channel, handler)

    def delete(self, channel: str, handler: Callable[..., Any]) -> Route:
        return self.handle(channel, handler)

    def handle(self, channel: str, handler: Callable[..., Any]) -> Route:
        route = Route(f"{self._prefix}{channel}", handler, self.router)
        if self._middleware:
            route.middleware(*self._middleware)
        if self._name:
            route.group(self._name)
        self.router.register(route)
        return route

    def group(self, config: GroupConfig, callback: Callable[['RouteRegistrar'], Any]):
        """Open a nested group that inherits this group's prefix and middleware"""
        inner = RouteGroup.make(config)
        group = RouteGroup(
            prefix=f"{self._prefix}{inner.prefix}",
            middleware=[*self._middleware, *inner.middleware],
            name=inner.name or self._name,
            description=inner.description,
        )
        if inner.name:
            self.router.add_group(group)
        callback(RouteRegistrar(self.router, group))

    def get_routes(self) -> List[RouteConfig]:
        return self.router.get_routes()

    def get_route_groups(self) -> List[RouteGroup]:
        return self.router.get_route_groups()


class Router:
    """
    Channel router

    Owns the route table, global middleware and named route middleware,
    and runs the dispatch algorithm:

        find route -> validate arguments -> global middleware ->
        route middleware -> handler

    Usage:
        router = Router()
        router.use(log_calls)
        router.get('ping', lambda context: 'pong')
        result = await router.dispatch('ping', [], context)
    """

    def __init__(self, validator: Optional[Validator] = None):
        self._routes: Dict[str, RouteConfig] = {}
        self._groups: Dict[str, RouteGroup] = {}
        self._global_middleware: List[Any] = []
        self.middleware_registry = RouteMiddlewareRegistry()
        self.validator = validator or Validator()

    # =========================================================================
    # Route Registration Methods
    # =========================================================================

    def get(self, channel: str, handler: Callable[..., Any]) -> Route:
        """Register a channel (query style)"""
        return self.handle(channel, handler)

    def post(self, channel: str, handler: Callable[..., Any]) -> Route:
        """Register a channel (create style)"""
        return self.handle(channel, handler)

    def put(self, channel: str, handler: Callable[..., Any]) -> Route:
        """Register a channel (update style)"""
        return self.handle(channel, handler)

    def delete(self, channel: str, handler: Callable[..., Any]) -> Route:
        """Register a channel (delete style)"""
        return self.handle(channel, handler)

    def handle(self, channel: str, handler: Callable[..., Any]) -> Route:
        """Register a channel and return its route builder"""
        route = Route(channel, handler, self)
        self.register(route)
        return route

    def register(self, route: Union[Route, RouteConfig]):
        """
        Add a route to the table

        Raises:
            RegistrationError: If the channel is already registered
        """
        config = route.config if isinstance(route, Route) else route
        if isinstance(route, Route):
            route._router = self

        if config.channel in self._routes:
            raise RegistrationError(f"Route [{config.channel}] has already been registered.")

        self._routes[config.channel] = config
        logger.debug(f"[Router] Registered route [{config.channel}]")

    def rename(self, old_channel: str, new_channel: str):
        """
        Move a registered route to a new channel name

        Raises:
            RouteNotFoundError: If old_channel is not registered
            RegistrationError: If new_channel is already registered
        """
        if old_channel not in self._routes:
            raise RouteNotFoundError(old_channel)
        if new_channel in self._routes:
            raise RegistrationError(f"Route [{new_channel}] has already been registered.")

        config = self._routes.pop(old_channel)
        config.channel = new_channel
        self._routes[new_channel] = config

    def group(self, config: GroupConfig, callback: Callable[[RouteRegistrar], Any]):
        """
        Create a route group

        Args:
            config: A prefix string, or a dict / RouteGroup with prefix,
                    middleware, name and description
            callback: Receives a RouteRegistrar scoped to the group
        """
        group = RouteGroup.make(config)
        if group.name:
            self.add_group(group)
        callback(RouteRegistrar(self, group))

    def add_group(self, group: RouteGroup):
        self._groups[group.name] = group

    # =========================================================================
    # Middleware
    # =========================================================================

    def use(self, middleware) -> 'Router':
        """Add a global middleware"""
        self._global_middleware.append(middleware)
        return self

    def middleware(self, *middleware) -> 'Router':
        """Add global middleware"""
        self._global_middleware.extend(middleware)
        return self

    def alias_middleware(self, name: str, middleware: Callable[..., Any]) -> 'Router':
        """Register middleware under a name usable in route.middleware('name')"""
        self.middleware_registry.alias(name, middleware)
        return self

    def get_global_middleware(self) -> List[Any]:
        return list(self._global_middleware)

    # =========================================================================
    # Lookup
    # =========================================================================

    def find_route(self, channel: str) -> Optional[RouteMatch]:
        config = self._routes.get(channel)
        if config is None:
            return None
        return RouteMatch(route=config)

    def get_route(self, channel: str) -> Optional[RouteConfig]:
        return self._routes.get(channel)

    def has(self, channel: str) -> bool:
        return channel in self._routes

    def get_routes(self) -> List[RouteConfig]:
        return list(self._routes.values())

    def get_route_groups(self) -> List[RouteGroup]:
        return list(self._groups.values())

    def list_routes(self) -> List[str]:
        """Formatted route list: 'channel - description (group: g)'"""
        lines = []
        for channel, config in self._routes.items():
            description = config.description or 'No description'
            group_info = f" (group: {config.group})" if config.group in self._groups else ''
            lines.append(f"{channel} - {description}{group_info}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            'routes': [config.to_dict() for config in self._routes.values()],
            'groups': [
                {'name': group.name, 'prefix': group.prefix, 'description': group.description}
                for group in self._groups.values()
            ],
        }

    def clear(self):
        """Remove every route, group and global middleware"""
        self._routes.clear()
        self._groups.clear()
        self._global_middleware.clear()

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(self, channel: str, args: Optional[Sequence[Any]] = None, context: Any = None) -> Any:
        """
        Dispatch a call to a channel and return the handler's raw result

        Raises:
            RouteNotFoundError: Unknown channel
            ValidationError: Arguments failed the route's rules (before any middleware runs)
            ResolutionError: A named middleware is not registered
            HandlerError: Wraps non-framework exceptions from middleware or handler
        """
        args = list(args or [])

        match = self.find_route(channel)
        if match is None:
            raise RouteNotFoundError(channel)
        route = match.route

        if route.validation:
            self.validator.validate_or_fail(args, route.validation)

        layers = self.middleware_registry.resolve_all([*self._global_middleware, *route.middleware])
        chain = MiddlewareChain(layers, route.handler, route.channel)

        try:
            return await chain.run(context, args)
        except FrameworkException:
            raise
        except Exception as e:
            raise HandlerError(channel, e) from e

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, channel: str) -> bool:
        return self.has(channel)
