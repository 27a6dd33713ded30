"""
Route List Command
Display all registered channels in a table
"""
from cosy.console.command import Command
from cosy.constants import ROUTER_ABSTRACT


class RouteListCommand(Command):
    """List all registered routes"""

    name = "route:list"
    description = "List all registered channels"

    async def handle(self, **kwargs):
        router = self.app.make(ROUTER_ABSTRACT)
        routes = router.to_dict()['routes']

        if not routes:
            self.warning("No routes registered")
            return 0

        rows = []
        for route in sorted(routes, key=lambda r: r['channel']):
            rows.append([
                route['channel'],
                route['handler'],
                ', '.join(route['middleware']) or '-',
                route['group'] or '-',
                route['description'] or '-',
            ])

        self.table(['Channel', 'Handler', 'Middleware', 'Group', 'Description'], rows)
        self.line()
        self.info(f"Total: {len(routes)} route(s)")
        return 0
