"""
HTTP Package
"""
from cosy.http.sanic_transport import SanicTransport

__all__ = [
    'SanicTransport',
]
