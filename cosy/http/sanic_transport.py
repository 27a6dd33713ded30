"""
Sanic Transport
Exposes the dispatch boundary over HTTP
"""
import re
from typing import Any, Dict, Optional

from sanic import Sanic
from sanic.exceptions import BadRequest
from sanic.request import Request
from sanic.response import json

from cosy.constants import ROUTER_ABSTRACT
from cosy.defaults import DEFAULT_DISPATCH_PATH, DEFAULT_HOST, DEFAULT_PORT
from cosy.dispatch import DispatchBoundary, DispatchContext
from cosy.logging import getLogger

logger = getLogger('cosy.http')

MALFORMED_BODY = 'Request body must be a JSON object with a string "channel" and a list "args"'


def sanic_name(name: str) -> str:
    """Turn an application name into a valid Sanic app name"""
    cleaned = re.sub(r'[^0-9a-zA-Z_]+', '_', name).strip('_') or 'cosy'
    if not cleaned[0].isalpha():
        cleaned = f"cosy_{cleaned}"
    return cleaned


class SanicTransport:
    """
    HTTP adapter over the dispatch boundary

    Endpoints:
        POST {path}          {"channel": "ping", "args": []} -> envelope
        GET  {path}/routes   registered channels

    The HTTP status is 200 for success envelopes and the error's status
    code otherwise (404 unknown channel, 422 validation, 429 rate limit,
    ...). A body that is not a dispatch request gets 400.

    The bearer token of the Authorization header is passed to middleware
    as ``context.metadata['token']``.

    Example:
        transport = SanicTransport(app)
        transport.serve(port=8000)
    """

    def __init__(
        self,
        app,
        name: Optional[str] = None,
        path: str = DEFAULT_DISPATCH_PATH,
        boundary: Optional[DispatchBoundary] = None,
    ):
        self.app = app
        self.path = '/' + path.strip('/')
        self.boundary = boundary or DispatchBoundary.for_app(app)

        self.sanic_app = Sanic(sanic_name(name or app.config('name')))
        # Disable sanic-ext auto-loading, the transport has its own routes only
        self.sanic_app.config.AUTO_EXTEND = False

        self.sanic_app.add_route(self.dispatch, self.path, methods=['POST'], name='dispatch')
        self.sanic_app.add_route(self.routes, f"{self.path}/routes", methods=['GET'], name='routes')
        self.sanic_app.register_listener(self.before_server_start, 'before_server_start')

    async def before_server_start(self, sanic_app, loop=None):
        await self.app.run()

    async def dispatch(self, request: Request):
        payload = self._parse_body(request)
        if payload is None:
            return json({'success': False, 'error': MALFORMED_BODY}, status=400)

        envelope, status = await self.boundary.handle_with_status(
            payload['channel'],
            payload['args'],
            self.make_context(request),
        )
        return json(envelope, status=status)

    async def routes(self, request: Request):
        router = self.app.make(ROUTER_ABSTRACT)
        return json({'routes': router.to_dict()['routes']})

    def make_context(self, request: Request) -> DispatchContext:
        return DispatchContext(
            source='http',
            sender_id=request.ip,
            metadata={
                'token': request.token,
                'user_agent': request.headers.get('user-agent'),
            },
        )

    @staticmethod
    def _parse_body(request: Request) -> Optional[Dict[str, Any]]:
        try:
            body = request.json
        except BadRequest:
            return None

        if not isinstance(body, dict) or not isinstance(body.get('channel'), str):
            return None

        args = body.get('args', [])
        if not isinstance(args, list):
            return None

        return {'channel': body['channel'], 'args': args}

    def serve(self, host: Optional[str] = None, port: Optional[int] = None, **kwargs):
        """Run the Sanic server"""
        host = host or DEFAULT_HOST
        port = port or DEFAULT_PORT
        logger.info(f"Serving {self.app.config('name')} on http://{host}:{port}{self.path}")
        self.sanic_app.run(host=host, port=port, **kwargs)
