from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from .effect import ReactiveEffect, create_effect

T = TypeVar("T")


class Computed(Generic[T]):
    """
    Derived value: fn is not run on creation, but every time
    `value` is read.

    Reading `value` from within another effect subscribes that
    effect to everything fn reads, so it runs again when any of
    those values change.
    """

    __slots__ = ("effect",)

    def __init__(self, fn: Callable[[], T], system) -> None:
        self.effect: ReactiveEffect[T] = create_effect(
            fn, system, lazy=True, computed=True
        )

    @property
    def value(self) -> Optional[T]:
        value = self.effect.run()
        tracker = self.effect.system.tracker
        if tracker.stack:
            for dep in self.effect.deps:
                tracker.depend(dep)
        return value

    def __repr__(self):
        return f"<{type(self).__name__} {self.effect.fn_fqn}>"
