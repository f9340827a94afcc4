"""
The tracker connects reads and writes on proxied objects to effects.

Reads record the effect on top of the stack as a subscriber of the
(target, key) pair, writes run every effect subscribed to it.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable

from .dep import Dep

logger = logging.getLogger(__name__)


class _IterateKey:
    __slots__ = ()

    def __repr__(self):
        return "ITERATE_KEY"


# Key recorded by reads that depend on the shape of a container
# (length, iteration, membership of all keys) instead of a single key
ITERATE_KEY = _IterateKey()


class Tracker:
    __slots__ = ("proxy_db", "stack")

    def __init__(self, proxy_db, stack: list) -> None:
        self.proxy_db = proxy_db
        self.stack = stack

    def record(self, target: Any, key: Hashable) -> None:
        if not self.stack:
            return
        deps = self.proxy_db.entry(target)["deps"]
        dep = deps.get(key)
        if dep is None:
            dep = deps[key] = Dep()
        self.depend(dep)

    def depend(self, dep: Dep) -> None:
        """Subscribe the active effect (if any) to the given dep."""
        if not self.stack:
            return
        current = self.stack[-1]
        if dep.add_sub(current):
            current.deps.append(dep)

    def notify(self, target: Any, *keys: Hashable) -> None:
        """
        Runs the effects subscribed to the given keys of target. Without
        any keys, the effects subscribed to any key of target are run.

        Plain effects run first, computed effects after that, both in
        order of creation.
        """
        deps = self.proxy_db.deps(target)
        if not deps:
            return

        if keys:
            selected = [deps[key] for key in keys if key in deps]
        else:
            selected = list(deps.values())

        subs = {sub for dep in selected for sub in dep}
        if not subs:
            return

        effects = sorted((s for s in subs if not s.computed), key=lambda s: s.id)
        computed_effects = sorted((s for s in subs if s.computed), key=lambda s: s.id)
        logger.debug(
            "notify %s %r: %d effects, %d computed",
            type(target).__name__,
            keys or "*",
            len(effects),
            len(computed_effects),
        )

        for effect in effects:
            effect.run()
        for effect in computed_effects:
            effect.run()
