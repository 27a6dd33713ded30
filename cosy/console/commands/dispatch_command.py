"""
Dispatch Command
Call a channel from the command line
"""
import json

from cosy.bootstrap import setup_dispatch
from cosy.console.command import Command
from cosy.dispatch import DispatchContext


def parse_argument(value: str):
    """Read an argument as JSON, falling back to the raw string"""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


class DispatchCommand(Command):
    """
    Dispatch a call and print the envelope

    Example:
        cosy dispatch notes:create '{"title": "hello"}' --app=notes.main:create_app
    """

    name = "dispatch"
    description = "Dispatch a call to a channel and print the result envelope"
    signature = "dispatch {channel} {args*}"

    async def handle(self, channel: str = None, *args, **kwargs):
        if not channel:
            self.error("Missing channel name")
            return 1

        dispatcher = setup_dispatch(self.app)
        envelope = await dispatcher.handle(
            channel,
            [parse_argument(arg) for arg in args],
            DispatchContext(source='console'),
        )

        self.json(envelope)
        return 0 if envelope['success'] else 1
