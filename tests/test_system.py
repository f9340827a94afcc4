from unittest.mock import Mock

import pytest

from tracked import ReactiveSystem, effect, get_system, init, reactive


def test_init_resets_default_system():
    state = reactive({"a": 1})
    fn = Mock(side_effect=lambda: state["a"])
    effect(fn)

    system = init()
    assert system is get_system()
    assert system.proxy_db.deps(state.__target__) == {}
    assert system.stack == []

    # the subscription is gone
    state["a"] = 2
    assert fn.call_count == 1


def test_independent_systems():
    first, second = ReactiveSystem(), ReactiveSystem()
    data = {"a": 1}

    first_state = first.reactive(data)
    second_state = second.reactive(data)
    assert first_state is not second_state
    assert first_state.__target__ is second_state.__target__

    first_fn = Mock(side_effect=lambda: first_state["a"])
    second_fn = Mock(side_effect=lambda: second_state["a"])
    first.effect(first_fn)
    second.effect(second_fn)

    first_state["a"] = 2
    assert first_fn.call_count == 2
    assert second_fn.call_count == 1

    second_state["a"] = 3
    assert first_fn.call_count == 2
    assert second_fn.call_count == 2


def test_reads_are_tracked_by_the_owning_system():
    other = ReactiveSystem()
    state = other.reactive({"a": 1})

    # the default system has no effect running
    fn = Mock(side_effect=lambda: state["a"])
    effect(fn)

    state["a"] = 2
    assert fn.call_count == 1


def test_system_computed():
    system = ReactiveSystem()
    state = system.reactive({"a": 1})

    @system.computed
    def double():
        return state["a"] * 2

    @system.computed()
    def triple():
        return state["a"] * 3

    assert double.value == 2
    assert triple.value == 3
    state["a"] = 2
    assert double.value == 4
    assert triple.value == 6


def test_system_reset():
    system = ReactiveSystem()
    state = system.reactive({"a": 1})
    fn = Mock(side_effect=lambda: state["a"])
    system.effect(fn)

    system.reset()
    state["a"] = 2
    assert fn.call_count == 1

    # proxies keep working after a reset
    system.effect(fn)
    state["a"] = 3
    assert fn.call_count == 3
    assert state["a"] == 3


def test_reset_keeps_proxies():
    system = ReactiveSystem()
    raw = {"a": 1}
    state = system.reactive(raw)

    system.reset()
    assert state["a"] == 1
    assert system.reactive(raw) is state

    # reads after a reset subscribe again, still on the same proxy
    fn = Mock(side_effect=lambda: state["a"])
    system.effect(fn)
    assert system.reactive(raw) is state
    system.reactive(raw)["a"] = 2
    assert fn.call_count == 2


def test_reset_nested_proxies():
    system = ReactiveSystem()
    raw = {"nested": {"title": "tom"}}
    state = system.reactive(raw)
    nested = state["nested"]

    system.reset()
    assert state["nested"] is nested
    assert system.reactive(raw["nested"]) is nested


def test_reset_while_running():
    system = ReactiveSystem()
    state = system.reactive({"a": 1})

    def fn():
        system.reset()

    with pytest.raises(RuntimeError, match="while effects are running"):
        system.effect(fn)
    assert system.stack == []

    # nothing was reset
    calls = Mock(side_effect=lambda: state["a"])
    system.effect(calls)
    state["a"] = 2
    assert calls.call_count == 2


def test_init_while_running():
    def fn():
        init()

    with pytest.raises(RuntimeError):
        effect(fn)
    assert get_system().stack == []
