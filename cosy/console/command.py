"""
Base Command Class
Laravel-style command base class for the cosy CLI
"""
import json
import sys
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, TextIO


class Command(ABC):
    """
    A console command run against a booted application

    Subclasses set ``name`` and implement ``handle``; the Kernel passes
    positional arguments and ``--key=value`` options as keyword arguments.

    Example:
        class NotesCountCommand(Command):
            name = "notes:count"
            description = "Count stored notes"

            async def handle(self, **kwargs):
                self.info(f"{len(self.app.make('notes'))} note(s)")
                return 0
    """

    # Command name (e.g., "route:list")
    name: str = ""

    # Command description
    description: str = ""

    # Command signature (for help display)
    signature: Optional[str] = None

    def __init__(self, output: Optional[TextIO] = None):
        if not self.signature:
            self.signature = self.name
        self.output = output
        self.app = None  # Set by run()

    async def run(self, app, *args, **kwargs) -> int:
        """Bind the application and run the command, returning its exit code"""
        self.app = app
        exit_code = await self.handle(*args, **kwargs)
        return 0 if exit_code is None else int(exit_code)

    @abstractmethod
    async def handle(self, *args, **kwargs):
        """
        Execute the command logic

        Returns:
            int: Exit code (0 for success, non-zero for error)
        """

    # Output helpers
    def write(self, text: str):
        # Resolved on each write so output capture (pytest capsys) sees it
        stream = self.output or sys.stdout
        stream.write(f"{text}\n")

    def info(self, message: str):
        self.write(f"ℹ {message}")

    def success(self, message: str):
        self.write(f"✅ {message}")

    def error(self, message: str):
        self.write(f"❌ {message}")

    def warning(self, message: str):
        self.write(f"⚠ {message}")

    def line(self, message: str = ""):
        self.write(message)

    def json(self, data: Any):
        """Print data as indented JSON (non-JSON values fall back to str())"""
        self.write(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def table(self, headers: Sequence[str], rows: List[Sequence[Any]]):
        """Print rows under headers with padded columns"""
        cells = [[str(cell) for cell in row] for row in rows]
        widths = [len(header) for header in headers]
        for row in cells:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))

        header_line = " | ".join(header.ljust(widths[i]) for i, header in enumerate(headers))
        self.line(header_line)
        self.line("-" * len(header_line))

        for row in cells:
            self.line(" | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
