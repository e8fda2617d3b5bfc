from __future__ import annotations

import hashlib
import threading
import time
from dataclasses import astuple
from typing import Callable, Dict, Optional, Tuple

from ..config import SETTINGS, ConversionSettings

CacheEntry = Tuple[float, bytes]


def cache_key(source: str, settings: ConversionSettings) -> str:
    raw = f"{source}|{astuple(settings)!r}"
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


class ResponseCache:
    def __init__(
        self,
        ttl: float = SETTINGS.cache_ttl,
        max_entries: int = SETTINGS.cache_size,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self._entries.get(key)
            if not entry:
                return None
            timestamp, data = entry
            if self._clock() - timestamp > self._ttl:
                self._entries.pop(key, None)
                return None
            return data

    def put(self, key: str, data: bytes) -> None:
        if self._ttl <= 0 or self._max_entries <= 0:
            return
        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self._max_entries:
                oldest = min(self._entries.items(), key=lambda item: item[1][0])[0]
                self._entries.pop(oldest, None)
            self._entries[key] = (self._clock(), data)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


CACHE = ResponseCache()
