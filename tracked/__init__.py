from importlib.metadata import version

__version__ = version("tracked")


from .computed import Computed
from .effect import ReactiveEffect
from .proxy import is_reactive, to_raw
from .system import (
    ReactiveSystem,
    computed,
    effect,
    get_system,
    init,
    reactive,
)
from .tracker import ITERATE_KEY
