"""Cache of global curve approximations.

Two faces meeting at an edge each approximate their own half-edge of
it.  Their approximations have to agree point for point, or the
resulting triangle mesh gets cracks along the seam.  The cache makes
sure the points are computed exactly once per global curve, range and
tolerance; everyone else gets the stored result.

Keys are built from handles, so two distinct global curves are never
confused even when their geometry happens to be equal.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging
import threading

logger = logging.getLogger(__name__)


class ApproxCache:
    """Thread-safe, insert-only memo of global curve approximations.

    ``get_or_insert`` computes each key at most once, even when several
    threads ask for it concurrently.  Computations for different keys
    can run in parallel.
    """

    def __init__(self):
        self._entries = {}
        self._pending = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(global_curve, range_, tolerance):
        return (global_curve, range_, tolerance)

    def get(self, key):
        with self._lock:
            return self._entries.get(key)

    def insert(self, key, approx):
        """Store ``approx`` unless ``key`` is present; return the stored value."""
        with self._lock:
            return self._entries.setdefault(key, approx)

    def get_or_insert(self, key, compute):
        with self._lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]
            key_lock = self._pending.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._entries:
                    self.hits += 1
                    return self._entries[key]
            value = compute()
            with self._lock:
                self._entries[key] = value
                self._pending.pop(key, None)
                self.misses += 1
            logger.debug('cached approximation for %r', key)
            return value

    def clear(self):
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key):
        with self._lock:
            return key in self._entries

    def __len__(self):
        with self._lock:
            return len(self._entries)


__all__ = ['ApproxCache']
