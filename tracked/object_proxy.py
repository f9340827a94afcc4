from datetime import date, time, timedelta, tzinfo
from enum import Enum
from functools import cache
from itertools import chain
from numbers import Number
from pathlib import PurePath
from uuid import UUID

from .proxy import TYPE_LOOKUP, Proxy, proxy


@cache
def get_class_slots(cls):
    """utility to collect all __slots__ entries for a given type and its supertypes"""
    return frozenset(
        chain.from_iterable(getattr(cls, "__slots__", ()) for cls in cls.__mro__)
    )


def get_object_attrs(obj):
    """
    utility to collect the stateful attributes of an object: its
    instance __dict__ and the __slots__ of its class ancestry
    """
    attrs = get_class_slots(type(obj))
    try:
        obj_keys = vars(obj).keys()
    except TypeError:
        # no __dict__ for objects with only __slots__
        return attrs
    if obj_keys:
        return attrs.union(obj_keys)
    return attrs


class ObjectProxyBase(Proxy):
    """
    Proxy for instances of user defined classes. Reads and writes
    of instance attributes are tracked, methods and class attributes
    are passed through to the target.
    """

    def __getattribute__(self, name):
        if name in Proxy.__slots__:
            return super().__getattribute__(name)

        target = self.__target__
        if name not in get_object_attrs(target):
            return getattr(target, name)

        system = self.__system__
        system.tracker.record(target, name)
        return proxy(getattr(target, name), system)

    def __setattr__(self, name, value):
        if name in Proxy.__slots__:
            return super().__setattr__(name, value)

        target = self.__target__
        setattr(target, name, value)
        # properties and other descriptors on the class don't
        # count as state of the object
        if name in get_object_attrs(target):
            self.__system__.tracker.notify(target, name)

    def __bool__(self):
        return bool(self.__target__)

    def __delattr__(self, name):
        if name in Proxy.__slots__:
            return super().__delattr__(name)

        target = self.__target__
        is_target_attr = name in get_object_attrs(target)
        delattr(target, name)
        if is_target_attr:
            self.__system__.tracker.notify(target, name)


def passthrough(method):
    def trap(self, *args, **kwargs):
        fn = getattr(self.__target__, method, None)
        if fn is None:
            # not cached: the class of the target might get
            # a new method later on
            raise TypeError(f"object of type '{type(self)}' has no {method}")
        return fn(*args, **kwargs)

    trap.__name__ = method
    return trap


def operator_passthrough(method):
    def trap(self, *args):
        target = self.__target__
        fn = getattr(target, method, None)
        if fn is None:
            # let Python try the reflected or non in-place operator
            return NotImplemented
        retval = fn(*args)
        if retval is target:
            # in-place operators should keep the proxy bound
            return self
        return retval

    trap.__name__ = method
    return trap


# Python looks up magic methods on the type, so __getattribute__
# never sees them. These are forwarded to the target explicitly.
# Class level hooks (__get__, __set_name__, __init_subclass__, ...)
# are left out: they would change how the proxy type itself behaves.
magic_methods = [
    "__abs__",
    "__aenter__",
    "__aexit__",
    "__aiter__",
    "__anext__",
    "__await__",
    "__bytes__",
    "__call__",
    "__ceil__",
    "__complex__",
    "__contains__",
    "__delitem__",
    "__dir__",
    "__enter__",
    "__eq__",
    "__exit__",
    "__float__",
    "__floor__",
    "__format__",
    "__ge__",
    "__getitem__",
    "__gt__",
    "__hash__",
    "__index__",
    "__int__",
    "__invert__",
    "__iter__",
    "__le__",
    "__len__",
    "__length_hint__",
    "__lt__",
    "__ne__",
    "__neg__",
    "__next__",
    "__pos__",
    "__repr__",
    "__reversed__",
    "__round__",
    "__setitem__",
    "__str__",
    "__trunc__",
]

# Binary operators, with their reflected and in-place variants
operators = [
    "add",
    "and",
    "divmod",
    "floordiv",
    "lshift",
    "matmul",
    "mod",
    "mul",
    "or",
    "pow",
    "rshift",
    "sub",
    "truediv",
    "xor",
]
operator_methods = [
    f"__{prefix}{op}__"
    for op in operators
    for prefix in ("", "r", "i")
    # there is no in-place divmod
    if not (prefix == "i" and op == "divmod")
]


ObjectProxy = type(
    "ObjectProxy",
    (ObjectProxyBase,),
    {
        **{method: passthrough(method) for method in magic_methods},
        **{method: operator_passthrough(method) for method in operator_methods},
    },
)

# Values of these types are immutable, so there is nothing to track
IMMUTABLE_TYPES = (
    Enum,
    Number,
    date,
    time,
    timedelta,
    tzinfo,
    PurePath,
    UUID,
)


def is_stateless(target):
    return not hasattr(target, "__dict__") and not get_class_slots(type(target))


def type_test(target):
    # exclude builtin objects
    # exclude objects for which we have better proxies available
    # exclude ndarrays
    # exclude immutable values
    return (
        not isinstance(target, (list, set, dict, tuple))
        and type(target).__module__ not in (object.__module__, "numpy")
        and not isinstance(target, IMMUTABLE_TYPES)
        and not is_stateless(target)
    )


TYPE_LOOKUP[type_test] = ObjectProxy
