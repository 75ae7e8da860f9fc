"""
Dashboard cache with a version counter.

Readers build their key from the current version; writers bump the version
after commit, so stale entries are never read again and simply expire.
"""

from django.conf import settings
from django.core.cache import cache

VERSION_KEY = "seizures:view-version"
DASHBOARD_KEY = "seizures:dashboard:v{version}"


def current_version():
    version = cache.get(VERSION_KEY)
    if version is None:
        cache.add(VERSION_KEY, 1, timeout=None)
        version = cache.get(VERSION_KEY, 1)
    return version


def bump_version():
    try:
        cache.incr(VERSION_KEY)
    except ValueError:
        # Key evicted or never set
        cache.set(VERSION_KEY, 2, timeout=None)


def dashboard_key():
    return DASHBOARD_KEY.format(version=current_version())


def get_or_build_dashboard(builder):
    """Return the cached dashboard payload, building it on a miss."""
    key = dashboard_key()
    payload = cache.get(key)
    if payload is None:
        payload = builder()
        cache.set(key, payload, timeout=settings.DASHBOARD_CACHE_SECONDS)
    return payload
