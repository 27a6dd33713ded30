"""
Tests for application bootstrap and the default service providers
"""
import logging

import pytest

from cosy import create_app
from cosy.application import ApplicationConfig, ApplicationState
from cosy.logging import ROOT_LOGGER
from cosy.logging.log_manager import LogManager
from cosy.providers import (
    ConfigServiceProvider,
    LoggingServiceProvider,
    RoutingServiceProvider,
)
from cosy.routing import Router
from cosy.service_provider import ServiceProvider
from cosy.support.config import ConfigRepository
from cosy.support.facades import Facade


class NotesServiceProvider(ServiceProvider):
    def register(self):
        self.app.singleton('notes', lambda container: ['first note'])

    async def boot(self):
        router = self.app.make('router')
        router.get('notes:list', lambda context: self.app.make('notes'))


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER)
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    root.propagate = propagate


@pytest.mark.asyncio
async def test_default_providers(booted_app):
    assert [provider.__class__ for provider in booted_app.providers()] == [
        ConfigServiceProvider,
        LoggingServiceProvider,
        RoutingServiceProvider,
    ]
    assert booted_app.state == ApplicationState.BOOTED
    assert isinstance(booted_app.make('config'), ConfigRepository)
    assert booted_app.make('ConfigManager') is booted_app.make('config')
    assert isinstance(booted_app.make('log'), LogManager)
    assert isinstance(booted_app.make('Router'), Router)
    assert booted_app.make('router') is booted_app.make('router')


@pytest.mark.asyncio
async def test_facade_application_is_set(booted_app):
    assert Facade.get_facade_application() is booted_app


@pytest.mark.asyncio
async def test_config_providers_and_middleware():
    calls = []

    def audit(context, next, channel, *args):
        calls.append(channel)
        return next()

    app = await create_app(ApplicationConfig(
        name='notes',
        env='test',
        providers=[NotesServiceProvider],
        middleware=[audit],
        settings={'notes': {'limit': 10}},
    ))

    assert app.providers()[-1].__class__ is NotesServiceProvider
    assert app.make('config').get('notes.limit') == 10
    assert app.make('config').get('app.name') == 'notes'
    assert await app.make('router').dispatch('notes:list') == ['first note']
    assert calls == ['notes:list']

    await app.shutdown()
    assert app.state == ApplicationState.SHUTDOWN


@pytest.mark.asyncio
async def test_default_config_comes_from_environment(monkeypatch, tmp_path):
    from cosy.support import EnvHelper

    EnvHelper.reset()
    EnvHelper.initialize(tmp_path / '.env')
    monkeypatch.setenv('APP_NAME', 'from-env')
    monkeypatch.setenv('APP_ENV', 'test')

    app = await create_app()

    assert app.config('name') == 'from-env'
    assert app.is_test()
    await app.shutdown()
    EnvHelper.reset()


@pytest.mark.asyncio
async def test_logging_level_follows_environment(restore_root_logger):
    app = await create_app(ApplicationConfig(env='development'))

    assert restore_root_logger.level == logging.DEBUG
    assert restore_root_logger.propagate
    await app.shutdown()


@pytest.mark.asyncio
async def test_logging_file_handler(restore_root_logger, tmp_path):
    log_file = tmp_path / 'logs' / 'cosy.log'
    app = await create_app(ApplicationConfig(
        env='test',
        settings={'logging': {'level': 'info', 'file': str(log_file), 'format': 'json'}},
    ))

    logging.getLogger('cosy.notes').info('note saved', extra={'note_id': 7})
    await app.shutdown()

    assert restore_root_logger.level == logging.INFO
    assert not restore_root_logger.propagate
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert '"note_id": 7' in log_file.read_text()


@pytest.mark.asyncio
async def test_register_failure_aborts_startup():
    class Broken(ServiceProvider):
        def register(self):
            raise RuntimeError('cannot bind')

    with pytest.raises(RuntimeError, match='cannot bind'):
        await create_app(ApplicationConfig(env='test', providers=[Broken]))
