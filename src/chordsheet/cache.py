"""Caller-owned cache entries.

There is no module-level cache: whoever fetches a value keeps the
:class:`CacheEntry` and asks it whether it may still be served.  The key
names who asked and for what (viewer, kind of object), so an entry fetched
for one viewer is never served to another.
"""

import time
from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: float  # time.time() when fetched
    key: Hashable  # e.g. (viewer_id, "folders") or a source location

    def is_fresh(self, key: Hashable, ttl: float, now: float | None = None) -> bool:
        """Return True if this entry may be served for *key* within *ttl* seconds."""
        if key != self.key:
            return False
        now = time.time() if now is None else now
        return 0 <= now - self.fetched_at < ttl
