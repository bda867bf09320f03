from __future__ import annotations

from time import monotonic
from typing import Any, Dict, Hashable, Optional, Tuple
import threading


class TTLCache:
    """In-memory TTL cache for per-tool AI results.

    - Capacity-bounded; when over capacity the entries closest to expiry go first.
    - Thread-safe using a simple lock.
    - Expired entries are dropped on read and purged opportunistically on write.
    """

    def __init__(self, max_items: int = 256, default_ttl_seconds: float = 300.0) -> None:
        self._data: Dict[Hashable, Tuple[float, Any]] = {}
        self._max = max_items
        self._default_ttl = default_ttl_seconds
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def _purge_locked(self) -> None:
        now = monotonic()
        for key in [k for k, (exp, _) in self._data.items() if exp <= now]:
            del self._data[key]
        if len(self._data) > self._max:
            over = len(self._data) - self._max
            for key, _ in sorted(self._data.items(), key=lambda kv: kv[1][0])[:over]:
                del self._data[key]

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            exp, value = item
            if exp <= monotonic():
                del self._data[key]
                return None
            return value

    def set(self, key: Hashable, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else float(ttl_seconds)
        if ttl <= 0:
            return
        with self._lock:
            self._data[key] = (monotonic() + ttl, value)
            self._purge_locked()

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


def tool_key(kind: str, tool_name: str) -> Tuple[str, str]:
    """Cache key for a per-tool result; tool names are case-insensitive."""
    return (kind, " ".join(tool_name.split()).lower())


TOOL_ANALYSIS_CACHE = TTLCache(max_items=256)
TOOL_DETAILS_CACHE = TTLCache(max_items=256)
