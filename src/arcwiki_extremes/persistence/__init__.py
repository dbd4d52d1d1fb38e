# ABOUTME: Content cache and request fingerprinting
# ABOUTME: Persists raw upstream responses so repeated runs skip the network

"""
Persistence Layer: content-addressed response cache

This layer handles:
- Request fingerprinting (FetchKey)
- Read-through / write-through storage of raw response bytes
- Treating missing and zero-length records as cache misses

Data Flow: extraction/ fetches -> cache records -> later identical fetches
"""

from .cache import (
    CacheWriteError,
    ContentCache,
    DirectoryContentCache,
    FetchKey,
    MemoryContentCache,
    compute_fetch_key,
)

__all__ = [
    "CacheWriteError",
    "ContentCache",
    "DirectoryContentCache",
    "FetchKey",
    "MemoryContentCache",
    "compute_fetch_key",
]
