from __future__ import annotations

from typing import Generic, TypeVar, cast

T = TypeVar("T")


class Proxy(Generic[T]):
    """
    Proxy for an object/target.

    Instantiating a Proxy registers it in the proxy_db of its reactive
    system, destroying a Proxy gives the db a chance to drop the entry
    of the target.

    Please use the `proxy` method to get a proxy for a certain object instead
    of directly creating one yourself. The `proxy` method will either create
    or return an existing proxy and makes sure that the db stays consistent.
    """

    __hash__ = None
    # the slots have to be very unique since we also proxy objects
    # which may define the attributes with the same names
    __slots__ = ("__system__", "__target__", "__weakref__")

    def __init__(self, target: T, system) -> None:
        self.__target__ = target
        self.__system__ = system
        system.proxy_db.reference(self)

    def __del__(self):
        self.__system__.proxy_db.dereference(self)


# Ordered lookup of type tests to the proxy type to use
# for objects that pass the test
TYPE_LOOKUP = {}


def proxy(target: T, system) -> T:
    """
    Returns the Proxy for the given object, creating it when the
    object wasn't proxied before. Proxies are returned as is and
    values that can't be proxied (numbers, strings, tuples, ...)
    are returned unchanged.
    """
    if isinstance(target, Proxy):
        return target

    existing_proxy = system.proxy_db.get_proxy(target)
    if existing_proxy is not None:
        return existing_proxy

    for type_test, proxy_type in TYPE_LOOKUP.items():
        if type_test(target):
            return proxy_type(target, system)

    return cast(T, target)


def is_reactive(target) -> bool:
    return isinstance(target, Proxy)


def to_raw(target: Proxy[T] | T) -> T:
    """
    Returns a raw object from which any trace of proxy has been replaced
    with its wrapped target value.
    """
    if isinstance(target, Proxy):
        return to_raw(target.__target__)

    if isinstance(target, list):
        return cast(T, [to_raw(t) for t in target])

    if isinstance(target, dict):
        return cast(T, {key: to_raw(value) for key, value in target.items()})

    if isinstance(target, tuple):
        return cast(T, tuple(to_raw(t) for t in target))

    if isinstance(target, set):
        return cast(T, {to_raw(t) for t in target})

    return target
