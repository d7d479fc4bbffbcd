# apps/analytics/repositories/cached.py
import hashlib
from django.conf import settings
from django.core.cache import cache
from functools import wraps


def make_cache_key(func_name, args, kwargs):
    # Stable across processes so every worker hits the same redis entry
    digest = hashlib.md5((str(args) + str(sorted(kwargs.items()))).encode('utf-8')).hexdigest()
    return f"analytics:{func_name}:{digest}"


def cache_heavy_query(timeout=None):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = make_cache_key(func.__name__, args, kwargs)
            result = cache.get(cache_key)
            if result is None:
                result = func(*args, **kwargs)
                cache.set(cache_key, result, timeout or settings.DASHBOARD_CACHE_TIMEOUT)
            return result
        return wrapper
    return decorator
