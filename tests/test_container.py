"""
Tests for the service container: bindings, singletons and aliases
"""
import threading
import time

import pytest

from cosy.container import ServiceContainer
from cosy.exceptions import ResolutionError


@pytest.fixture
def container():
    return ServiceContainer()


def test_singleton_resolves_to_same_instance(container):
    container.singleton('cache', lambda c: {})

    assert container.resolve('cache') is container.resolve('cache')


def test_factory_binding_builds_new_instance_each_time(container):
    container.bind('request', lambda c: object())

    assert container.resolve('request') is not container.resolve('request')


def test_factory_receives_the_container(container):
    container.instance('name', 'cosy')
    container.bind('greeting', lambda c: f"hello {c.resolve('name')}")

    assert container.make('greeting') == 'hello cosy'


def test_instance_is_returned_as_registered(container):
    value = object()
    container.instance('value', value)

    assert container.resolve('value') is value
    assert container.is_shared('value')


def test_unbound_name_raises_resolution_error(container):
    with pytest.raises(ResolutionError) as excinfo:
        container.resolve('missing')

    assert 'missing' in str(excinfo.value)
    assert excinfo.value.key == 'missing'


def test_bind_rejects_non_callable_factory(container):
    with pytest.raises(TypeError):
        container.bind('broken', 42)


def test_rebinding_replaces_binding_and_cached_instance(container):
    container.singleton('clock', lambda c: 'first')
    assert container.resolve('clock') == 'first'

    container.singleton('clock', lambda c: 'second')

    assert container.resolve('clock') == 'second'


def test_alias_chain_resolves_to_binding(container):
    container.singleton('router', lambda c: object())
    container.alias('Router', 'router')
    container.alias('RouteRegistry', 'Router')

    assert container.resolve('RouteRegistry') is container.resolve('router')
    assert container.get_alias('RouteRegistry') == 'router'


def test_alias_cycle_raises(container):
    container.alias('a', 'b')
    container.alias('b', 'a')

    with pytest.raises(ResolutionError, match='Circular alias'):
        container.resolve('a')


def test_alias_to_itself_is_rejected(container):
    with pytest.raises(ResolutionError):
        container.alias('self', 'self')


def test_dangling_alias_names_both_ends(container):
    container.alias('Mailer', 'mailer')

    with pytest.raises(ResolutionError) as excinfo:
        container.resolve('Mailer')

    assert 'Mailer' in str(excinfo.value)
    assert 'mailer' in str(excinfo.value)


def test_has_and_resolved(container):
    container.singleton('cache', lambda c: {})
    container.alias('Cache', 'cache')

    assert container.has('cache')
    assert container.bound('Cache')
    assert 'cache' in container
    assert not container.has('nothing')

    assert not container.resolved('cache')
    container.resolve('Cache')
    assert container.resolved('cache')


def test_forget_removes_binding_and_aliases(container):
    container.singleton('cache', lambda c: {})
    container.alias('Cache', 'cache')

    container.forget('cache')

    assert not container.has('cache')
    assert not container.has('Cache')


def test_forget_instance_reruns_factory(container):
    calls = []
    container.singleton('service', lambda c: calls.append(1) or len(calls))

    assert container.resolve('service') == 1
    container.forget_instance('service')
    assert container.resolve('service') == 2


def test_flush_clears_everything(container):
    container.singleton('a', lambda c: 1)
    container.alias('A', 'a')

    container.flush()

    assert container.get_bindings() == {}
    assert container.aliases == {}


def test_list_bindings_groups_singletons_and_factories(container):
    container.singleton('cache', lambda c: {})
    container.bind('request', lambda c: object())
    container.alias('Cache', 'cache')

    listing = container.list_bindings()

    assert 'Singletons:' in listing
    assert 'Factories (bind):' in listing
    assert 'aliases: Cache' in listing


def test_empty_container_listing(container):
    assert container.list_bindings() == "No bindings registered in container."


def test_singleton_created_once_under_concurrent_resolution(container):
    created = []

    def factory(c):
        time.sleep(0.01)
        created.append(object())
        return created[-1]

    container.singleton('shared', factory)

    results = []
    threads = [threading.Thread(target=lambda: results.append(container.resolve('shared'))) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(created) == 1
    assert all(result is created[0] for result in results)
