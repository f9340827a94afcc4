import gc
import sys
from weakref import WeakMethod, finalize, ref


class ProxyDb:
    """
    Table of proxied objects, keyed on the id of the raw object.

    Each entry holds the raw object, a weak reference to its proxy and
    the dependencies that were recorded for the keys of the raw object.
    Plain dicts and lists can't be weakly referenced, so the table holds
    the raw object itself and drops the entry as soon as it is the only
    one left holding it: either when the proxy is deleted or during
    a garbage collection run.
    """

    __slots__ = ("__weakref__", "db")

    def __init__(self):
        self.db = {}
        weak_cleanup = WeakMethod(self.cleanup)

        def cleanup(phase, info):
            method = weak_cleanup()
            if method is not None:
                method(phase, info)

        gc.callbacks.append(cleanup)
        finalize(self, gc.callbacks.remove, cleanup)

    def cleanup(self, phase, info):
        """
        Callback for the garbage collector that drops the entries
        of raw objects that are only referenced from this table
        """
        if phase != "stop":
            return

        # Refs:
        # - sys.getrefcount
        # - ref in db entry
        keys_to_delete = [
            key
            for key, entry in self.db.items()
            if sys.getrefcount(entry["target"]) <= 2
        ]
        for key in keys_to_delete:
            del self.db[key]

    def clear_deps(self):
        """
        Forgets all recorded dependencies. Proxies stay registered,
        so every raw object keeps mapping to the same proxy.
        """
        # copy: the gc callback may drop entries meanwhile
        for entry in list(self.db.values()):
            entry["deps"] = {}

    def entry(self, target):
        """
        Returns the entry for the given raw object, creating it if
        it doesn't exist yet.
        """
        obj_id = id(target)
        entry = self.db.get(obj_id)
        if entry is None:
            entry = self.db[obj_id] = {
                "target": target,
                "proxy": None,
                "deps": {},
            }
        return entry

    def reference(self, proxy):
        """
        Registers a freshly created proxy for its raw object
        """
        entry = self.entry(proxy.__target__)
        existing = entry["proxy"]() if entry["proxy"] is not None else None
        if existing is not None and existing is not proxy:
            raise RuntimeError("Proxy for target already in db")
        entry["proxy"] = ref(proxy)

    def dereference(self, proxy):
        """
        Removes the entry for the proxy's raw object if nothing else
        holds on to the raw object anymore
        """
        obj_id = id(proxy.__target__)
        entry = self.db.get(obj_id)
        if entry is None:
            # The table might have been reset already
            return

        existing = entry["proxy"]() if entry["proxy"] is not None else None
        if existing is not None and existing is not proxy:
            return

        # Ref count is 3 here: the db entry, proxy.__target__
        # and the argument of getrefcount
        if sys.getrefcount(entry["target"]) <= 3:
            del self.db[obj_id]

    def get_proxy(self, target):
        """
        Returns the proxy for the given raw object or None if
        there is no (living) proxy for it.
        """
        entry = self.db.get(id(target))
        if entry is None or entry["proxy"] is None:
            return None
        return entry["proxy"]()

    def deps(self, target):
        """
        Returns the dict of key -> Dep for the given raw object,
        or None if nothing was ever recorded for it.
        """
        entry = self.db.get(id(target))
        if entry is None:
            return None
        return entry["deps"]
