"""
Pytest configuration: every test starts with no facade application and an
empty facade cache.
"""
import pytest
import pytest_asyncio

from cosy.application import Application, ApplicationConfig
from cosy.bootstrap import create_app
from cosy.routing import Router
from cosy.support.facades import Facade


@pytest.fixture(autouse=True)
def reset_facades():
    Facade.reset()
    yield
    Facade.reset()


@pytest.fixture
def router():
    return Router()


@pytest.fixture
def app_config():
    return ApplicationConfig(name='cosy-test', env='test')


@pytest.fixture
def application(app_config):
    return Application(app_config)


@pytest_asyncio.fixture
async def booted_app(app_config):
    app = await create_app(app_config)
    yield app
    await app.shutdown()


class Trace:
    """Collects execution markers from middleware and handlers"""

    def __init__(self):
        self.events = []

    def middleware(self, name):
        async def layer(context, next, channel, *args):
            self.events.append(f"{name}-enter")
            result = await next()
            self.events.append(f"{name}-exit")
            return result

        layer.__name__ = name
        return layer

    def handler(self, result):
        def handle(context, *args):
            self.events.append('handler')
            return result

        return handle


@pytest.fixture
def trace():
    return Trace()
