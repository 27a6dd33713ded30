"""
Support Package
Configuration, environment helpers and facades
"""
from cosy.support.config import ConfigRepository, ConfigObject
from cosy.support.env_helper import EnvHelper

__all__ = [
    'ConfigRepository',
    'ConfigObject',
    'EnvHelper',
]
