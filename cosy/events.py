"""
Event Emitter
Synchronous publish/subscribe helper used for application lifecycle events
"""
from typing import Any, Callable, Dict, List

Listener = Callable[..., Any]


class EventEmitter:
    """
    Minimal event emitter

    Listeners run synchronously, in subscription order, inside ``emit``.
    A listener raising an exception propagates to the emitter.

    Example:
        app.on('booted', lambda: print('ready'))
        app.once('shutdown', cleanup)
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> 'EventEmitter':
        """Subscribe a listener to an event"""
        self._listeners.setdefault(event, []).append(listener)
        return self

    def once(self, event: str, listener: Listener) -> 'EventEmitter':
        """Subscribe a listener that is removed after its first call"""
        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            return listener(*args, **kwargs)

        wrapper.listener = listener
        return self.on(event, wrapper)

    def off(self, event: str, listener: Listener) -> 'EventEmitter':
        """Unsubscribe a listener (also matches listeners added with once())"""
        listeners = self._listeners.get(event, [])
        for registered in list(listeners):
            if registered is listener or getattr(registered, 'listener', None) is listener:
                listeners.remove(registered)
                break
        return self

    def emit(self, event: str, *args, **kwargs) -> bool:
        """
        Call every listener of an event

        Returns:
            True if the event had listeners
        """
        listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            listener(*args, **kwargs)
        return bool(listeners)

    def listeners(self, event: str) -> List[Listener]:
        """Get the listeners of an event"""
        return list(self._listeners.get(event, []))

    def remove_all_listeners(self, event: str = None) -> 'EventEmitter':
        """Remove the listeners of one event, or of every event"""
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)
        return self
