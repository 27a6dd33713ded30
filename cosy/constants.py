"""
Container keys and their aliases
"""

EMOJI = '💤'

# Abstract names registered in the service container
APP_ABSTRACT = 'app'
APP_ALIASES = ['Application']

CONTAINER_ABSTRACT = 'container'
CONTAINER_ALIASES = ['ServiceContainer']

ROUTER_ABSTRACT = 'router'
ROUTER_ALIASES = ['Router']

CONFIG_ABSTRACT = 'config'
CONFIG_ALIASES = ['ConfigManager']

LOG_ABSTRACT = 'log'
LOG_ALIASES = ['LogManager']

DISPATCHER_ABSTRACT = 'dispatcher'
DISPATCHER_ALIASES = ['DispatchBoundary']

HTTP_ABSTRACT = 'http'
HTTP_ALIASES = ['SanicTransport']
