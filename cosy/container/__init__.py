"""
Container Package
"""
from cosy.container.service_container import ServiceContainer, Binding

__all__ = [
    'ServiceContainer',
    'Binding',
]
