"""Cached product and category listings.

Listing responses are stored under a key that embeds a catalog version
number. Any catalog write bumps the version, so stale pages are never served
and simply expire.
"""

from django.conf import settings
from django.core.cache import cache

VERSION_KEY = "catalog:version"


def _version() -> int:
    version = cache.get(VERSION_KEY)
    if version is None:
        cache.add(VERSION_KEY, 1, timeout=None)
        version = cache.get(VERSION_KEY, 1)
    return version


def listing_key(scope: str, full_path: str) -> str:
    return f"catalog:{scope}:v{_version()}:{full_path}"


def get_listing(scope: str, full_path: str):
    return cache.get(listing_key(scope, full_path))


def store_listing(scope: str, full_path: str, data):
    cache.set(listing_key(scope, full_path), data, timeout=settings.PRODUCT_LIST_CACHE_TTL)


def invalidate_listings():
    try:
        cache.incr(VERSION_KEY)
    except ValueError:
        cache.set(VERSION_KEY, 2, timeout=None)
