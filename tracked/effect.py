"""
Effects are functions that are run while being tracked: every
reactive read made during the run subscribes the effect, every
write to such a value runs the effect again.
"""

from __future__ import annotations

import logging
from itertools import count
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Every effect gets a unique ID which is used to
# keep track of the order in which subscribers will
# be notified
_ids = count()


class ReactiveEffect(Generic[T]):
    __slots__ = (
        "__weakref__",
        "computed",
        "deps",
        "fn",
        "id",
        "lazy",
        "system",
    )

    def __init__(
        self,
        fn: Callable[..., T],
        system,
        lazy: bool = False,
        computed: bool = False,
    ) -> None:
        """
        lazy: Don't run on creation
        computed: Run after the plain effects when notified
        """
        self.id = next(_ids)
        self.fn = fn
        self.system = system
        self.lazy = lazy
        self.computed = computed
        # Deps this effect has been added to. Never pruned: an effect
        # stays subscribed to everything it has ever read.
        self.deps = []

    def __call__(self, *args, **kwargs) -> Optional[T]:
        return self.run(*args, **kwargs)

    def __repr__(self):
        return f"<{type(self).__name__} {self.id} {self.fn_fqn}>"

    def run(self, *args, **kwargs) -> Optional[T]:
        """
        Runs fn with this effect as the active one. Returns None
        without running when this effect is already running.
        """
        stack = self.system.stack
        if self in stack:
            logger.debug("skipping recursive run of %r", self)
            return None

        stack.append(self)
        try:
            return self.fn(*args, **kwargs)
        finally:
            stack.pop()

    @property
    def fn_fqn(self) -> str:
        module = getattr(self.fn, "__module__", None)
        name = getattr(self.fn, "__qualname__", None) or repr(self.fn)
        return f"{module}.{name}" if module else name


def create_effect(
    fn: Callable[..., T],
    system,
    lazy: bool = False,
    computed: bool = False,
) -> ReactiveEffect[T]:
    effect = ReactiveEffect(fn, system, lazy=lazy, computed=computed)
    if not lazy:
        effect.run()
    return effect


def effect_decorator(system, _fn=None, *, lazy=False, computed=False) -> Any:
    """
    Supports both plain calls and usage as decorator,
    with or without arguments.
    """

    def decorator_effect(fn: Callable[..., T]) -> ReactiveEffect[T]:
        return create_effect(fn, system, lazy=lazy, computed=computed)

    if _fn is None:
        return decorator_effect
    return decorator_effect(_fn)
