# ABOUTME: Content-addressed cache mapping request fingerprints to raw response bytes
# ABOUTME: Directory-backed store for real runs plus an in-memory store for tests and --no-cache

from __future__ import annotations

import asyncio
import hashlib
import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, NewType, Protocol

from arcwiki_extremes.utils.logging import get_logger

FetchKey = NewType("FetchKey", str)

logger = get_logger(__name__)


class CacheWriteError(Exception):
    """Raised when a payload could not be persisted. Never fatal to a run."""


def compute_fetch_key(target: str, params: Mapping[str, Any]) -> FetchKey:
    """Fingerprint a request as the SHA-256 of its canonical JSON encoding.

    Parameter order does not matter; any change to the target or to a
    parameter name or value produces a different key.
    """
    canonical = json.dumps([target, dict(params)], sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return FetchKey(hashlib.sha256(canonical.encode("utf-8")).hexdigest())


class ContentCache(Protocol):
    """Key -> bytes store. Empty payloads are never valid records."""

    async def get(self, key: FetchKey) -> bytes | None:
        """Return the stored payload, or None when absent or empty."""
        ...

    async def put(self, key: FetchKey, payload: bytes) -> None:
        """Persist a payload.

        Raises:
            CacheWriteError: If the payload could not be written
        """
        ...


class DirectoryContentCache:
    """One file per key under ``cache_dir``.

    Records are immutable: a key that already holds a non-empty file is left
    alone. Writes land in a temporary sibling first and are renamed into
    place, so a crash can leave at worst a stray temp file, never a truncated
    record under a real key.
    """

    def __init__(self, cache_dir: str | os.PathLike[str]):
        self.cache_dir = Path(cache_dir)
        self._ensured = False

    def path_for(self, key: FetchKey) -> Path:
        return self.cache_dir / key

    def _ensure_dir(self) -> None:
        if self._ensured:
            return
        if not self.cache_dir.exists():
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created cache directory", cache_dir=str(self.cache_dir))
        self._ensured = True

    def _read(self, key: FetchKey) -> bytes | None:
        path = self.path_for(key)
        try:
            if path.stat().st_size == 0:
                return None
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Unreadable cache record, treating as a miss", key=key, error=str(e))
            return None

    def _write(self, key: FetchKey, payload: bytes) -> None:
        self._ensure_dir()
        path = self.path_for(key)
        if path.exists() and path.stat().st_size > 0:
            return

        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=f".{key[:16]}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def get(self, key: FetchKey) -> bytes | None:
        return await asyncio.to_thread(self._read, key)

    async def put(self, key: FetchKey, payload: bytes) -> None:
        if not payload:
            raise ValueError("Refusing to cache an empty payload")
        try:
            await asyncio.to_thread(self._write, key, payload)
        except OSError as e:
            raise CacheWriteError(f"Could not write cache record {key}: {e}") from e
        logger.debug("Cached payload", key=key, size=len(payload))

    def __len__(self) -> int:
        if not self.cache_dir.exists():
            return 0
        return sum(1 for p in self.cache_dir.iterdir() if p.is_file() and not p.name.startswith("."))


class MemoryContentCache:
    """Dictionary-backed cache with the same semantics as the directory store."""

    def __init__(self, records: Mapping[FetchKey, bytes] | None = None):
        self.records: dict[FetchKey, bytes] = dict(records or {})
        self.writes = 0

    async def get(self, key: FetchKey) -> bytes | None:
        return self.records.get(key) or None

    async def put(self, key: FetchKey, payload: bytes) -> None:
        if not payload:
            raise ValueError("Refusing to cache an empty payload")
        self.writes += 1
        if not self.records.get(key):
            self.records[key] = payload

    def __len__(self) -> int:
        return len(self.records)
