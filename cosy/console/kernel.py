"""
Console Kernel
Entry point of the ``cosy`` command line
"""
import asyncio
import importlib
import inspect
import os
import sys
import traceback
from typing import Dict, List, Optional, Tuple, Type

from cosy.application import Application
from cosy.console.command import Command
from cosy.console.commands import DEFAULT_COMMANDS
from cosy.constants import EMOJI

APP_ENV_VAR = 'COSY_APP'


async def load_app(target: Optional[str] = None) -> Application:
    """
    Load the application a command runs against

    Args:
        target: 'module:attribute' naming an Application or a (sync or async)
                factory returning one. Defaults to $COSY_APP, then to a
                default application built from the environment.
    """
    target = target or os.environ.get(APP_ENV_VAR)

    if not target:
        from cosy.bootstrap import create_app
        return await create_app()

    module_name, _, attribute = target.partition(':')
    if not module_name or not attribute:
        raise ValueError(f"Invalid application path '{target}', expected 'module:attribute'")

    loaded = getattr(importlib.import_module(module_name), attribute)
    if not isinstance(loaded, Application) and callable(loaded):
        loaded = loaded()
        if inspect.isawaitable(loaded):
            loaded = await loaded

    if not isinstance(loaded, Application):
        raise TypeError(f"'{target}' did not produce an Application")

    await loaded.boot()
    return loaded


class Kernel:
    """
    Command registry and runner

    Usage:
        kernel = Kernel()
        kernel.register(MyCommand)
        exit_code = await kernel.run(['cosy', 'route:list', '--app=notes.main:app'])
    """

    def __init__(self, commands: Optional[List[Type[Command]]] = None):
        self.commands: Dict[str, Command] = {}
        for command_class in (DEFAULT_COMMANDS if commands is None else commands):
            self.register(command_class)

    def register(self, command_class: Type[Command]) -> Command:
        command = command_class()
        self.commands[command.name] = command
        return command

    def show_help(self):
        """Show available commands"""
        print(f"{EMOJI} cosy - application console")
        print()

        if not self.commands:
            print("No commands available.")
            return

        # Group commands by category
        categories: Dict[str, List[Command]] = {}
        for name, command in self.commands.items():
            category = name.split(':')[0] if ':' in name else 'general'
            categories.setdefault(category, []).append(command)

        for category in sorted(categories):
            print(f"{category.upper()}:")
            for command in sorted(categories[category], key=lambda c: c.name):
                print(f"  {command.signature:<35} {command.description}")
            print()

        print("Options:")
        print(f"  {'--app=module:attribute':<35} Application to load (or set ${APP_ENV_VAR})")
        print()
        print("Run 'cosy help <command>' for detailed information")

    async def run(self, argv: List[str]) -> int:
        """Run the CLI application"""
        if len(argv) < 2:
            self.show_help()
            return 0

        command_name = argv[1]

        if command_name in ['help', '--help', '-h']:
            if len(argv) > 2:
                cmd_name = argv[2]
                if cmd_name in self.commands:
                    command = self.commands[cmd_name]
                    print(f"\nCommand: {command.name}")
                    print(f"Description: {command.description}")
                    print(f"Signature: {command.signature}")
                    return 0
                print(f"Unknown command: {cmd_name}\n")
                self.show_help()
                return 1
            self.show_help()
            return 0

        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        command = self.commands[command_name]
        args, kwargs = self._parse_args(argv[2:])
        app_target = kwargs.pop('app', None)

        try:
            return await command.run(await load_app(app_target), *args, **kwargs)
        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            print(f"\n❌ Error executing command: {e}\n")
            traceback.print_exc()
            return 1
        finally:
            if command.app is not None:
                await command.app.shutdown()
                command.app = None

    def _parse_args(self, argv: List[str]) -> Tuple[list, dict]:
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)

        Everything after a bare '--' is positional.
        """
        args = []
        kwargs = {}
        positional_only = False

        for arg in argv:
            if positional_only or not arg.startswith('-') or self._is_number(arg):
                args.append(arg)
            elif arg == '--':
                positional_only = True
            elif arg.startswith('--'):
                # Long option (--verbose, --name=value)
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    kwargs[key] = self._convert(value)
                else:
                    kwargs[arg[2:]] = True
            else:
                # Short option
                kwargs[arg[1:]] = True

        return args, kwargs

    @staticmethod
    def _convert(value: str):
        try:
            return int(value)
        except ValueError:
            if value.lower() in ('true', 'false'):
                return value.lower() == 'true'
            return value

    @staticmethod
    def _is_number(value: str) -> bool:
        try:
            float(value)
        except ValueError:
            return False
        return True


def main(argv: Optional[List[str]] = None):
    """Console entry point"""
    sys.exit(asyncio.run(Kernel().run(argv if argv is not None else sys.argv)))
