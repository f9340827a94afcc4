from .proxy import TYPE_LOOKUP, Proxy
from .traps import construct_methods_traps_dict

# Lists are tracked as a whole: every read depends on the shape
# of the list and every write notifies all of its readers
list_traps = {
    "READERS": {
        "count",
        "index",
        "copy",
        "__add__",
        "__getitem__",
        "__contains__",
        "__eq__",
        "__ge__",
        "__gt__",
        "__le__",
        "__lt__",
        "__mul__",
        "__ne__",
        "__rmul__",
        "__len__",
        "__repr__",
        "__str__",
        "__format__",
        "__sizeof__",
    },
    "ITERATORS": {
        "__iter__",
        "__reversed__",
    },
    "WRITERS": {
        "append",
        "clear",
        "extend",
        "insert",
        "pop",
        "remove",
        "reverse",
        "sort",
        "__setitem__",
        "__delitem__",
        "__iadd__",
        "__imul__",
    },
}


class ListProxyBase(Proxy[list]):
    pass


ListProxy = type(
    "ListProxy",
    (ListProxyBase,),
    construct_methods_traps_dict(list, list_traps),
)


def type_test(target):
    return isinstance(target, list)


TYPE_LOOKUP[type_test] = ListProxy
