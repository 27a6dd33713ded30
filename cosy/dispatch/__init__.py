"""
Dispatch Package
"""
from cosy.dispatch.context import DispatchContext
from cosy.dispatch.boundary import DispatchBoundary, ensure_transport_safe

__all__ = [
    'DispatchContext',
    'DispatchBoundary',
    'ensure_transport_safe',
]
