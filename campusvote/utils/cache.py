"""Small in-process read-through cache with expiry."""
import threading
import time


class TTLCache:
    """Read-through cache whose entries expire after ``ttl_seconds``.

    A ttl of 0 disables caching: every ``get_or_load`` calls the loader.
    """

    def __init__(self, ttl_seconds: int, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get_or_load(self, key, loader):
        """Return the cached value for key, calling loader() on a miss."""
        if self.ttl_seconds <= 0:
            return loader()

        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry and entry[1] > now:
                return entry[0]

        # Load outside the lock; concurrent misses store the same result
        value = loader()
        with self._lock:
            self._entries[key] = (value, self._clock() + self.ttl_seconds)
        return value

    def invalidate(self, key=None):
        """Drop one entry, or everything when key is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)
