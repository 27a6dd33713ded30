"""
Container List Command
Inspect the service container
"""
from cosy.console.command import Command


class ContainerListCommand(Command):
    """List all container bindings"""

    name = "container:list"
    description = "List all registered container bindings"

    async def handle(self, **kwargs):
        container = self.app.container()
        self.line(container.list_bindings())
        self.line()
        self.info(f"Total: {len(container.get_bindings())} binding(s)")
        return 0
