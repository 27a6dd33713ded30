from cosy.console.commands.route_list_command import RouteListCommand
from cosy.console.commands.container_list_command import ContainerListCommand
from cosy.console.commands.dispatch_command import DispatchCommand

DEFAULT_COMMANDS = [
    RouteListCommand,
    ContainerListCommand,
    DispatchCommand,
]

__all__ = [
    'RouteListCommand',
    'ContainerListCommand',
    'DispatchCommand',
    'DEFAULT_COMMANDS',
]
