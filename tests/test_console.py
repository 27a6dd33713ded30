"""
Tests for the console kernel and built-in commands
"""
import io
import json

import pytest

from cosy.console import Command, Kernel
from cosy.console.commands.dispatch_command import parse_argument

APP = '--app=cosy_console_app:create'


@pytest.fixture
def kernel():
    return Kernel()


class GreetCommand(Command):
    name = 'greet'
    description = 'Say hello'

    async def handle(self, who='world', *args, shout=False, **kwargs):
        message = f"hello {who}"
        self.line(message.upper() if shout else message)


@pytest.mark.asyncio
async def test_help(kernel, capsys):
    assert await kernel.run(['cosy']) == 0

    output = capsys.readouterr().out
    assert 'route:list' in output
    assert 'container:list' in output
    assert 'dispatch' in output


@pytest.mark.asyncio
async def test_help_for_command(kernel, capsys):
    assert await kernel.run(['cosy', 'help', 'dispatch']) == 0

    assert 'dispatch {channel} {args*}' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_unknown_command(kernel, capsys):
    assert await kernel.run(['cosy', 'nope']) == 1

    assert 'Unknown command: nope' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_route_list(kernel, capsys):
    assert await kernel.run(['cosy', 'route:list', APP]) == 0

    output = capsys.readouterr().out
    assert 'Channel' in output
    assert 'notes:count' in output
    assert 'Count notes' in output
    assert 'Total: 2 route(s)' in output


@pytest.mark.asyncio
async def test_route_list_without_routes(kernel, capsys):
    assert await kernel.run(['cosy', 'route:list', '--app=cosy_console_app:bare']) == 0

    assert 'No routes registered' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_app_without_router(kernel, capsys):
    assert await kernel.run(['cosy', 'route:list', '--app=cosy_console_app:empty']) == 1

    assert 'Error executing command' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_container_list(kernel, capsys):
    assert await kernel.run(['cosy', 'container:list', APP]) == 0

    output = capsys.readouterr().out
    assert 'Singletons:' in output
    assert 'router' in output
    assert 'notes' in output


@pytest.mark.asyncio
async def test_dispatch_success(kernel, capsys):
    assert await kernel.run(['cosy', 'dispatch', 'math:add', '2', '-3', APP]) == 0

    assert json.loads(capsys.readouterr().out) == {'success': True, 'data': -1}


@pytest.mark.asyncio
async def test_dispatch_failure(kernel, capsys):
    assert await kernel.run(['cosy', 'dispatch', 'math:add', '"two"', '3', APP]) == 1

    envelope = json.loads(capsys.readouterr().out)
    assert envelope == {'success': False, 'error': "Argument 0 must be of type number, got string"}


@pytest.mark.asyncio
async def test_dispatch_without_channel(kernel, capsys):
    assert await kernel.run(['cosy', 'dispatch', APP]) == 1

    assert 'Missing channel name' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_app_must_be_an_application(kernel, capsys):
    assert await kernel.run(['cosy', 'route:list', '--app=cosy_console_app:not_an_app']) == 1


@pytest.mark.asyncio
async def test_app_path_must_name_an_attribute(kernel, capsys):
    assert await kernel.run(['cosy', 'route:list', '--app=cosy_console_app']) == 1


@pytest.mark.asyncio
async def test_app_from_environment(kernel, capsys, monkeypatch):
    monkeypatch.setenv('COSY_APP', 'cosy_console_app:create')

    assert await kernel.run(['cosy', 'dispatch', 'notes:count']) == 0

    assert json.loads(capsys.readouterr().out) == {'success': True, 'data': 2}


@pytest.mark.asyncio
async def test_custom_command_options(capsys):
    kernel = Kernel(commands=[GreetCommand])

    assert await kernel.run(['cosy', 'greet', 'cosy', '--shout', APP]) == 0

    assert capsys.readouterr().out.strip() == 'HELLO COSY'


def test_parse_args(kernel):
    args, kwargs = kernel._parse_args(['a', '-1', '--name=notes', '--port=80', '--debug=false', '-v', '--', '--raw'])

    assert args == ['a', '-1', '--raw']
    assert kwargs == {'name': 'notes', 'port': 80, 'debug': False, 'v': True}


@pytest.mark.parametrize('value,expected', [
    ('3', 3),
    ('{"title": "hello"}', {'title': 'hello'}),
    ('[1, 2]', [1, 2]),
    ('true', True),
    ('hello', 'hello'),
])
def test_parse_argument(value, expected):
    assert parse_argument(value) == expected


class TestCommandOutput:
    @pytest.mark.asyncio
    async def test_run_binds_app_and_defaults_exit_code(self):
        stream = io.StringIO()
        command = GreetCommand(output=stream)

        assert await command.run('the-app', 'cosy') == 0

        assert command.app == 'the-app'
        assert stream.getvalue() == 'hello cosy\n'

    def test_helpers_and_table(self):
        stream = io.StringIO()
        command = GreetCommand(output=stream)

        command.error('broken')
        command.json({'success': True})
        command.table(['Channel', 'Name'], [['ping', None]])

        lines = stream.getvalue().splitlines()
        assert lines[0] == '❌ broken'
        assert json.loads('\n'.join(lines[1:4])) == {'success': True}
        assert lines[4] == 'Channel | Name'
        assert lines[5] == '-' * len('Channel | Name')
        assert lines[6] == 'ping    | None'
