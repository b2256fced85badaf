import pytest

import cachematrix


@pytest.fixture(autouse=True)
def _isolate_global_state():
    cachematrix.reset_config()
    cachematrix.clear_cache_events()
    yield
    cachematrix.reset_config()
    cachematrix.clear_cache_events()
