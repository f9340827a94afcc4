import gc

import pytest

from tracked import init


@pytest.fixture(autouse=True)
def clear_system():
    # Running gc first drops the proxies of earlier tests
    # which are only kept alive by reference cycles
    gc.collect()
    init()
    try:
        yield
    finally:
        init()
