"""
Tests for the event emitter
"""
import pytest

from cosy.events import EventEmitter


def test_listeners_run_in_subscription_order():
    emitter = EventEmitter()
    calls = []
    emitter.on('ready', lambda: calls.append('first'))
    emitter.on('ready', lambda: calls.append('second'))

    assert emitter.emit('ready') is True
    assert calls == ['first', 'second']


def test_emit_without_listeners_returns_false():
    assert EventEmitter().emit('nothing') is False


def test_emit_passes_arguments():
    emitter = EventEmitter()
    received = []
    emitter.on('data', lambda *args, **kwargs: received.append((args, kwargs)))

    emitter.emit('data', 1, 2, key='value')

    assert received == [((1, 2), {'key': 'value'})]


def test_once_listener_runs_a_single_time():
    emitter = EventEmitter()
    calls = []
    emitter.once('ready', lambda: calls.append('once'))

    emitter.emit('ready')
    emitter.emit('ready')

    assert calls == ['once']
    assert emitter.listeners('ready') == []


def test_off_removes_plain_and_once_listeners():
    emitter = EventEmitter()

    def listener():
        pass

    emitter.on('a', listener)
    emitter.once('b', listener)

    emitter.off('a', listener).off('b', listener)

    assert emitter.listeners('a') == []
    assert emitter.listeners('b') == []


def test_remove_all_listeners():
    emitter = EventEmitter()
    emitter.on('a', print).on('b', print)

    emitter.remove_all_listeners('a')
    assert emitter.listeners('a') == []
    assert emitter.listeners('b') == [print]

    emitter.remove_all_listeners()
    assert emitter.listeners('b') == []


def test_listener_errors_propagate():
    emitter = EventEmitter()

    def broken():
        raise RuntimeError("listener failed")

    emitter.on('ready', broken)

    with pytest.raises(RuntimeError, match="listener failed"):
        emitter.emit('ready')
