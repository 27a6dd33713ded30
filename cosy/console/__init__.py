"""
Console Package
"""
from cosy.console.command import Command
from cosy.console.kernel import Kernel, load_app, main

__all__ = [
    'Command',
    'Kernel',
    'load_app',
    'main',
]
