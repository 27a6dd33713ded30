"""
Tests for facades and the global helpers
"""
import pytest

from cosy import helpers
from cosy.exceptions import FacadeError
from cosy.support.facades import App, Config, Facade, Log, Route, create_facade


class Clock:
    def now(self):
        return 1234


class ClockFacade(Facade):
    @classmethod
    def get_facade_accessor(cls):
        return 'clock'


class FakeClock:
    def now(self):
        return 0


def test_facade_without_application():
    with pytest.raises(FacadeError, match="Application has not been set."):
        Route.get('ping', lambda context: 'pong')


def test_facade_error_is_a_runtime_error():
    with pytest.raises(RuntimeError):
        ClockFacade.now()


@pytest.mark.asyncio
async def test_route_facade_registers_on_the_router(booted_app):
    Route.get('ping', lambda context: 'pong')

    assert booted_app.make('router').has('ping')
    assert await booted_app.make('router').dispatch('ping') == 'pong'


@pytest.mark.asyncio
async def test_root_is_cached_per_accessor(booted_app):
    booted_app.bind('clock', lambda container: Clock())

    assert ClockFacade.get_facade_root() is ClockFacade.get_facade_root()

    ClockFacade.clear_resolved_instance('clock')
    booted_app.bind('clock', lambda container: FakeClock())

    assert ClockFacade.now() == 0


@pytest.mark.asyncio
async def test_unbound_accessor(booted_app):
    with pytest.raises(FacadeError, match=r"cannot resolve \[clock\]"):
        ClockFacade.now()


@pytest.mark.asyncio
async def test_missing_method(booted_app):
    booted_app.instance('clock', Clock())

    with pytest.raises(FacadeError, match="Method tick does not exist on 'clock'"):
        ClockFacade.tick()


@pytest.mark.asyncio
async def test_call_static(booted_app):
    booted_app.instance('clock', Clock())

    assert ClockFacade.call_static('now') == 1234
    with pytest.raises(FacadeError):
        ClockFacade.call_static('tick')


@pytest.mark.asyncio
async def test_swap(booted_app):
    booted_app.instance('clock', Clock())

    ClockFacade.swap(FakeClock())

    assert ClockFacade.now() == 0


def test_private_names_are_not_proxied():
    with pytest.raises(AttributeError):
        ClockFacade._secret


def test_facade_must_define_accessor():
    class Nameless(Facade):
        pass

    with pytest.raises(FacadeError):
        Nameless.get_facade_root()


@pytest.mark.asyncio
async def test_app_facade_is_the_application(booted_app):
    assert App.get_facade_root() is booted_app
    assert App.make('router') is booted_app.make('router')
    assert App.bound('config')


@pytest.mark.asyncio
async def test_config_and_log_facades(booted_app):
    assert Config.get('app.name') == 'cosy-test'
    assert Config.get('app.env') == 'test'
    assert Log.channel('dispatch').name == 'cosy.dispatch'


@pytest.mark.asyncio
async def test_create_facade_proxy(booted_app):
    booted_app.instance('clock', Clock())
    clock = create_facade(ClockFacade)

    assert clock.now() == 1234
    assert clock.get_facade_accessor() == 'clock'

    clock.swap(FakeClock())
    assert clock.now() == 0


def test_reset_forgets_application(application):
    Facade.set_facade_application(application)
    assert Facade.get_app() is application

    Facade.reset()

    assert Facade.get_app() is None


@pytest.mark.asyncio
async def test_helpers(booted_app):
    assert helpers.app() is booted_app
    assert helpers.app('router') is booted_app.make('router')
    assert helpers.config('app.name') == 'cosy-test'
    assert helpers.config('missing.key', 'fallback') == 'fallback'
    assert helpers.config() is booted_app.make('config')
    assert helpers.logger('dispatch').name == 'cosy.dispatch'
