"""
Middleware Pipeline
Index-based continuation over the middleware stack of one dispatch
"""
import inspect
from typing import Any, Callable, List, Sequence


class Next:
    """
    Continuation handed to each middleware

    Calling it runs the rest of the chain and returns an awaitable.
    """

    __slots__ = ('_chain', '_index', '_context', '_args')

    def __init__(self, chain: 'MiddlewareChain', index: int, context: Any, args: Sequence[Any]):
        self._chain = chain
        self._index = index
        self._context = context
        self._args = args

    def __call__(self):
        return self._chain.invoke(self._index, self._context, self._args)


class MiddlewareChain:
    """
    Runs middleware in order, then the handler

    Middleware signature: (context, next, channel, *args). The handler is
    called as handler(context, *args). Both may be sync or async.

    Example:
        chain = MiddlewareChain([timing, auth], handler, 'users:get')
        result = await chain.run(context, [42])
    """

    def __init__(self, middleware: List[Callable[..., Any]], handler: Callable[..., Any], channel: str):
        self.middleware = middleware
        self.handler = handler
        self.channel = channel

    async def run(self, context: Any, args: Sequence[Any]) -> Any:
        return await self.invoke(0, context, args)

    async def invoke(self, index: int, context: Any, args: Sequence[Any]) -> Any:
        if index < len(self.middleware):
            layer = self.middleware[index]
            result = layer(context, Next(self, index + 1, context, args), self.channel, *args)
        else:
            result = self.handler(context, *args)

        if inspect.isawaitable(result):
            result = await result
        return result

    def __len__(self) -> int:
        return len(self.middleware)
