"""
Route Facade
Provides static access to the Router instance
"""
from cosy.constants import ROUTER_ABSTRACT
from cosy.support.facades.facade import Facade


class Route(Facade):
    """
    Route Facade

    Provides static access to the Router for defining channels.

    Example:
        from cosy.support.facades import Route

        # Define routes
        Route.get('users:list', handler)
        Route.post('users:create', handler).validation({0: {'required': True, 'type': 'object'}})

        # Route groups
        Route.group({'prefix': 'admin:', 'middleware': ['auth']}, lambda group: [
            group.get('stats', stats_handler),
        ])
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return ROUTER_ABSTRACT
