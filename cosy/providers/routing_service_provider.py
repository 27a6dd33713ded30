"""
Routing Service Provider
"""
from cosy.constants import ROUTER_ABSTRACT, ROUTER_ALIASES
from cosy.routing import Router
from cosy.service_provider import ServiceProvider


class RoutingServiceProvider(ServiceProvider):
    def register(self):
        """Register the router as a singleton"""
        self.app.singleton(ROUTER_ABSTRACT, lambda container: Router())
        for alias in ROUTER_ALIASES:
            self.app.alias(alias, ROUTER_ABSTRACT)

    def provides(self):
        return [ROUTER_ABSTRACT, *ROUTER_ALIASES]
