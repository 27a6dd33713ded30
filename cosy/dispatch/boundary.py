"""
Dispatch Boundary
The single place where dispatch errors are caught and turned into envelopes
"""
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from cosy.constants import DISPATCHER_ABSTRACT, DISPATCHER_ALIASES, ROUTER_ABSTRACT
from cosy.dispatch.context import DispatchContext
from cosy.exceptions import ErrorHandler, FacadeError, UnsafeResultError
from cosy.routing import Router

SafetyCheck = Callable[[Any], None]


def ensure_transport_safe(value: Any, _path: Optional[set] = None):
    """
    Check that a value is plain, acyclic data

    Allowed: None, bool, int, float, str, and lists, tuples and dicts with
    string keys made of those.

    Raises:
        TypeError: Naming the first offending value
        ValueError: If a container contains itself
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return

    if not isinstance(value, (list, tuple, dict)):
        raise TypeError(f"{value.__class__.__name__} values cannot be transported")

    path = _path if _path is not None else set()
    marker = id(value)
    if marker in path:
        raise ValueError("cyclic structures cannot be transported")
    path.add(marker)

    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"dict keys must be strings, got {key.__class__.__name__}")
            ensure_transport_safe(item, path)
    else:
        for item in value:
            ensure_transport_safe(item, path)

    path.discard(marker)


class DispatchBoundary:
    """
    Runs dispatches and always answers with an envelope

    Success: {'success': True, 'data': result}
    Failure: {'success': False, 'error': message}

    handle() never raises: unknown channels, validation failures,
    middleware and handler errors and unsafe results all become failure
    envelopes, logged once by the ErrorHandler.

    Usage:
        boundary = DispatchBoundary(router)
        envelope = await boundary.handle('ping', [], DispatchContext(sender_id=1))
    """

    def __init__(
        self,
        router: Router,
        error_handler: Optional[ErrorHandler] = None,
        safety_check: Optional[SafetyCheck] = ensure_transport_safe,
    ):
        self.router = router
        self.error_handler = error_handler or ErrorHandler()
        self.safety_check = safety_check

    async def handle(
        self,
        channel: str,
        args: Optional[Sequence[Any]] = None,
        context: Any = None,
    ) -> Dict[str, Any]:
        envelope, _ = await self.handle_with_status(channel, args, context)
        return envelope

    async def handle_with_status(
        self,
        channel: str,
        args: Optional[Sequence[Any]] = None,
        context: Any = None,
    ) -> Tuple[Dict[str, Any], int]:
        """Like handle(), also returning the status code of the outcome (200 on success)"""
        if context is None:
            context = DispatchContext()

        try:
            result = await self.router.dispatch(channel, list(args or []), context)
            self.check_result(channel, result)
            return {'success': True, 'data': result}, 200
        except FacadeError:
            raise
        except Exception as e:
            return self.error_handler.handle_error(e, channel), self.error_handler.get_status_code(e)

    def check_result(self, channel: str, result: Any):
        """
        Raises:
            UnsafeResultError: If the safety check rejects the result
        """
        if self.safety_check is None:
            return
        try:
            self.safety_check(result)
        except (TypeError, ValueError) as e:
            raise UnsafeResultError(channel, str(e)) from e
        except RecursionError as e:
            raise UnsafeResultError(channel, "result is nested too deeply") from e

    def channels(self):
        """Registered channel names"""
        return [route.channel for route in self.router.get_routes()]

    @classmethod
    def for_app(cls, app) -> 'DispatchBoundary':
        """
        Get the application's boundary, binding one on first use

        The boundary wraps the 'router' service and reports errors with the
        application's debug setting.
        """
        if app.bound(DISPATCHER_ABSTRACT):
            return app.make(DISPATCHER_ABSTRACT)

        boundary = cls(app.make(ROUTER_ABSTRACT), ErrorHandler(debug=app.config('debug')))
        app.instance(DISPATCHER_ABSTRACT, boundary)
        for alias in DISPATCHER_ALIASES:
            app.alias(alias, DISPATCHER_ABSTRACT)
        return boundary
