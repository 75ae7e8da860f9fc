import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_cache():
    # Throttle counters and dashboard entries live in the cache
    cache.clear()
    yield
    cache.clear()
