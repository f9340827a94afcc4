"""
A reactive system owns all state needed for tracking: the table
of proxies and recorded dependencies, and the stack of running
effects. Proxies and effects keep a reference to the system that
created them, so separate systems never see each other's
subscriptions.
"""

from __future__ import annotations

from typing import Callable, TypeVar

# register the proxy types
from . import dict_proxy, list_proxy, object_proxy  # noqa: F401
from .computed import Computed
from .effect import ReactiveEffect, effect_decorator
from .proxy import proxy
from .proxy_db import ProxyDb
from .tracker import Tracker

T = TypeVar("T")


class ReactiveSystem:
    __slots__ = ("__weakref__", "proxy_db", "stack", "tracker")

    def __init__(self) -> None:
        self.proxy_db = ProxyDb()
        self.stack: list[ReactiveEffect] = []
        self.tracker = Tracker(self.proxy_db, self.stack)

    def reactive(self, target: T) -> T:
        return proxy(target, self)

    def effect(self, _fn=None, *, lazy=False, computed=False):
        return effect_decorator(self, _fn, lazy=lazy, computed=computed)

    def computed(self, _fn: Callable[[], T] | None = None):
        if _fn is None:
            return self.computed
        return Computed(_fn, self)

    def reset(self) -> None:
        """
        Forget all dependencies. Existing proxies and effects keep
        working but lose their subscriptions.
        """
        if self.stack:
            raise RuntimeError(
                f"Can't reset while effects are running: {self.stack!r}"
            )
        self.proxy_db.clear_deps()


# Process wide system used by the module level functions
_system = ReactiveSystem()


def get_system() -> ReactiveSystem:
    return _system


def init() -> ReactiveSystem:
    _system.reset()
    return _system


def reactive(target: T) -> T:
    return _system.reactive(target)


def effect(_fn=None, *, lazy=False, computed=False):
    """
    Creates an effect for fn, and runs it right away unless lazy.
    Can be used as a decorator as well:

        @effect
        def log():
            print(state["count"])
    """
    return effect_decorator(_system, _fn, lazy=lazy, computed=computed)


def computed(_fn: Callable[[], T] | None = None):
    """
    Creates a derived value for fn. fn runs on every read of
    the `value` property, never on creation.
    """
    return _system.computed(_fn)
