"""
Application Package
"""
from cosy.application.config import ApplicationConfig
from cosy.application.application import Application, ApplicationState, ServiceProviderRecord

__all__ = [
    'Application',
    'ApplicationConfig',
    'ApplicationState',
    'ServiceProviderRecord',
]
