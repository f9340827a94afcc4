"""
Trap factories for the methods of proxied containers. Each factory
takes the name of a method and the container type and returns a
function that forwards the call to the raw container, recording
reads and notifying writes on the way.
"""

from functools import wraps

from .proxy import proxy
from .tracker import ITERATE_KEY


def read_trap(method, obj_cls):
    fn = getattr(obj_cls, method)

    @wraps(fn)
    def trap(self, *args, **kwargs):
        self.__system__.tracker.record(self.__target__, ITERATE_KEY)
        value = fn(self.__target__, *args, **kwargs)
        return proxy(value, self.__system__)

    return trap


def iterate_trap(method, obj_cls):
    fn = getattr(obj_cls, method)

    @wraps(fn)
    def trap(self, *args, **kwargs):
        system = self.__system__
        system.tracker.record(self.__target__, ITERATE_KEY)
        iterator = fn(self.__target__, *args, **kwargs)
        if method == "items":
            return ((key, proxy(value, system)) for key, value in iterator)
        return (proxy(value, system) for value in iterator)

    return trap


def read_key_trap(method, obj_cls):
    fn = getattr(obj_cls, method)

    @wraps(fn)
    def trap(self, *args, **kwargs):
        self.__system__.tracker.record(self.__target__, args[0])
        value = fn(self.__target__, *args, **kwargs)
        return proxy(value, self.__system__)

    return trap


def write_trap(method, obj_cls):
    fn = getattr(obj_cls, method)

    @wraps(fn)
    def trap(self, *args, **kwargs):
        retval = fn(self.__target__, *args, **kwargs)
        # any key might have changed, so notify all of them
        self.__system__.tracker.notify(self.__target__)
        if retval is self.__target__:
            # in-place operators should keep the proxy bound
            return self
        return retval

    return trap


def write_key_trap(method, obj_cls):
    fn = getattr(obj_cls, method)

    @wraps(fn)
    def trap(self, *args, **kwargs):
        key = args[0]
        target = self.__target__
        is_new = key not in target
        retval = fn(target, *args, **kwargs)
        if method == "setdefault":
            retval = proxy(retval, self.__system__)
            if not is_new:
                return retval
        self.__system__.tracker.notify(target, key, ITERATE_KEY)
        return retval

    return trap


def delete_key_trap(method, obj_cls):
    fn = getattr(obj_cls, method)

    @wraps(fn)
    def trap(self, *args, **kwargs):
        target = self.__target__
        key = args[0]
        existed = key in target
        retval = fn(target, *args, **kwargs)
        if existed:
            self.__system__.tracker.notify(target, key, ITERATE_KEY)
        return retval

    return trap


trap_map = {
    "READERS": read_trap,
    "KEYREADERS": read_key_trap,
    "ITERATORS": iterate_trap,
    "WRITERS": write_trap,
    "KEYWRITERS": write_key_trap,
    "KEYDELETERS": delete_key_trap,
}


def construct_methods_traps_dict(obj_cls, traps):
    return {
        method: trap_map[trap_type](method, obj_cls)
        for trap_type, methods in traps.items()
        for method in methods
    }
