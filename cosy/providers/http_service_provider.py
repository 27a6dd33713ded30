"""
HTTP Service Provider
Registers the Sanic transport for the dispatch boundary
"""
import logging

from cosy.constants import CONFIG_ABSTRACT, HTTP_ABSTRACT, HTTP_ALIASES
from cosy.defaults import DEFAULT_DISPATCH_PATH
from cosy.http import SanicTransport
from cosy.service_provider import ServiceProvider


class HttpServiceProvider(ServiceProvider):
    """HTTP layer service provider"""

    def register(self):
        """Register the transport (created on first use)"""
        def make_transport(container):
            config = container.resolve(CONFIG_ABSTRACT)
            return SanicTransport(
                self.app,
                name=config.get('http.name'),
                path=config.get('http.path', DEFAULT_DISPATCH_PATH),
            )

        self.app.singleton(HTTP_ABSTRACT, make_transport)
        for alias in HTTP_ALIASES:
            self.app.alias(alias, HTTP_ABSTRACT)

    def boot(self):
        # Keep Sanic's own console output out of the framework loggers
        for logger_name in ('sanic.root', 'sanic.error', 'sanic.access', 'sanic.server'):
            logging.getLogger(logger_name).propagate = False

    def provides(self):
        return [HTTP_ABSTRACT, *HTTP_ALIASES]
