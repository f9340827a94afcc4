from unittest.mock import Mock

from tracked import ITERATE_KEY, effect, get_system, reactive
from tracked.dep import Dep


def test_dep_subscribes_once():
    dep = Dep()
    sub = object()

    assert dep.add_sub(sub)
    assert not dep.add_sub(sub)
    assert len(dep) == 1
    assert sub in dep


def test_record_outside_effect():
    state = reactive({"a": 1})
    tracker = get_system().tracker

    assert state["a"] == 1
    tracker.record(state.__target__, "a")

    assert not get_system().proxy_db.deps(state.__target__)


def test_record_bidirectional():
    raw = {"a": 1}
    state = reactive(raw)

    e = effect(lambda: state["a"] + state["a"])

    deps = get_system().proxy_db.deps(raw)
    assert set(deps) == {"a"}
    assert list(deps["a"]) == [e]
    # reading twice doesn't subscribe twice
    assert e.deps == [deps["a"]]


def test_record_keys_separately():
    raw = {"a": 1, "b": 2, "c": 3}
    state = reactive(raw)

    e = effect(lambda: (state["a"], state.get("b"), "c" in state, len(state)))

    deps = get_system().proxy_db.deps(raw)
    assert set(deps) == {"a", "b", "c", ITERATE_KEY}
    assert len(e.deps) == 4


def test_notify_untracked_target():
    tracker = get_system().tracker
    # nothing recorded at all: no-op
    tracker.notify({"a": 1}, "a")
    tracker.notify({"a": 1})


def test_notify_untracked_key():
    raw = {"a": 1}
    state = reactive(raw)
    fn = Mock(side_effect=lambda: state["a"])
    effect(fn)
    assert fn.call_count == 1

    get_system().tracker.notify(raw, "b")
    assert fn.call_count == 1

    get_system().tracker.notify(raw, "a")
    assert fn.call_count == 2


def test_notify_without_key_reaches_all_keys():
    raw = {"a": 1, "b": 2}
    state = reactive(raw)
    a = Mock(side_effect=lambda: state["a"])
    b = Mock(side_effect=lambda: state["b"])
    effect(a)
    effect(b)

    get_system().tracker.notify(raw)
    assert a.call_count == 2
    assert b.call_count == 2


def test_notify_runs_each_effect_once():
    raw = {"a": 1, "b": 2}
    state = reactive(raw)
    fn = Mock(side_effect=lambda: state["a"] + state["b"])
    effect(fn)

    get_system().tracker.notify(raw, "a", "b")
    assert fn.call_count == 2

    get_system().tracker.notify(raw)
    assert fn.call_count == 3


def test_notify_order_of_creation():
    state = reactive({"a": 1})
    calls = []

    for name in ("first", "second", "third"):
        effect(lambda name=name: calls.append((name, state["a"])))

    calls.clear()
    state["a"] = 2
    assert calls == [("first", 2), ("second", 2), ("third", 2)]


def test_deps_accumulate():
    # an effect stays subscribed to keys it no longer reads
    state = reactive({"flag": True, "a": 1, "b": 2})
    fn = Mock(side_effect=lambda: state["a"] if state["flag"] else state["b"])
    e = effect(fn)
    assert len(e.deps) == 2

    state["flag"] = False
    assert fn.call_count == 2
    assert len(e.deps) == 3

    state["a"] = 10
    assert fn.call_count == 3
