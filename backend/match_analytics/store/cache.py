"""Time-to-live cache for loaded records and the match index."""

import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class TTLCache:
    """
    Key/value cache whose entries expire `ttl_seconds` after being set.

    Owned by whoever constructs it (the application keeps one on
    `app.state`); there is no module-level instance.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be non-negative, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Get a live entry, dropping it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return default

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return default
        return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store an entry, dropping any that have expired."""
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = (now, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl_seconds]
        for key in expired:
            del self._entries[key]

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one entry, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for stored_at, _ in self._entries.values() if now - stored_at < self.ttl_seconds)


_MISSING = object()
