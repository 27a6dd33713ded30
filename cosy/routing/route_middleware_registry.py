"""
Route Middleware Registry
Maps short names to middleware so routes can reference them by string
"""
from typing import Any, Callable, Dict, List, Union

from cosy.exceptions import ResolutionError

MiddlewareEntry = Union[str, Callable[..., Any]]


class RouteMiddlewareRegistry:
    """
    Registry of named route middleware

    Usage:
        registry.alias('auth', AuthMiddleware())
        router.get('profile', handler).middleware('auth')
    """

    def __init__(self):
        self._aliases: Dict[str, Callable[..., Any]] = {}

    def alias(self, name: str, middleware: Callable[..., Any]):
        if not callable(middleware):
            raise TypeError(f"Middleware [{name}] must be callable")
        self._aliases[name] = middleware

    def has(self, name: str) -> bool:
        return name in self._aliases

    def get_aliases(self) -> Dict[str, Callable[..., Any]]:
        return dict(self._aliases)

    def resolve(self, entry: MiddlewareEntry) -> Callable[..., Any]:
        """
        Turn a middleware entry into a callable

        Raises:
            ResolutionError: If a name is not registered
        """
        if isinstance(entry, str):
            if entry not in self._aliases:
                raise ResolutionError(f"Middleware [{entry}] is not registered", entry)
            return self._aliases[entry]

        if not callable(entry):
            raise TypeError(f"Middleware must be callable or a registered name, got {entry!r}")
        return entry

    def resolve_all(self, entries: List[MiddlewareEntry]) -> List[Callable[..., Any]]:
        return [self.resolve(entry) for entry in entries]

    def clear(self):
        self._aliases.clear()
