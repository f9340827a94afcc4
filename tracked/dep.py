"""
A Dep is the set of effects subscribed to a single key of a
single target object.
"""

from __future__ import annotations

from typing import Iterator


class Dep:
    __slots__ = ("__weakref__", "_subs")

    def __init__(self) -> None:
        # dict used as an insertion ordered set
        self._subs: dict["ReactiveEffect", None] = {}  # noqa: F821

    def __contains__(self, sub: "ReactiveEffect") -> bool:  # noqa: F821
        return sub in self._subs

    def __iter__(self) -> Iterator["ReactiveEffect"]:  # noqa: F821
        return iter(self._subs)

    def __len__(self) -> int:
        return len(self._subs)

    def add_sub(self, sub: "ReactiveEffect") -> bool:  # noqa: F821
        """
        Subscribe the given effect. Returns False if it was
        already subscribed.
        """
        if sub in self._subs:
            return False
        self._subs[sub] = None
        return True
