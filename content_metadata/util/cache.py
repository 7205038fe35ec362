import threading
from typing import TYPE_CHECKING, Generic, TypeVar, TypeVarTuple, Unpack

if TYPE_CHECKING:
    from content_metadata.internal.models import (
        ContentConfig,
        ContentEncryptionConfig,
    )


class CacheMetrics:
    """Thread-safe cache metrics tracker."""

    hits: int
    misses: int
    _lock: threading.Lock

    def __init__(self):
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def record_hit(self):
        with self._lock:
            self.hits += 1

    def record_miss(self):
        with self._lock:
            self.misses += 1

    def hit_rate(self) -> float:
        """Return cache hit rate as percentage (0-100)."""
        with self._lock:
            total = self.hits + self.misses
            if total == 0:
                return 0.0
            return (self.hits / total) * 100

    def reset(self):
        """Reset all metrics to zero."""
        with self._lock:
            self.hits = 0
            self.misses = 0


VT = TypeVar("VT")
KTs = TypeVarTuple("KTs")


class SimpleCache(Generic[VT, Unpack[KTs]]):
    """Unbounded, thread-safe map from a key tuple to a value.

    Entries are never evicted or expired. The first value stored for a key
    wins; later stores for the same key return the existing value.
    """

    _cache: dict[tuple[*KTs], VT]
    _lock: threading.Lock
    _metrics: CacheMetrics

    def __init__(self):
        self._cache = {}
        self._lock = threading.Lock()
        self._metrics = CacheMetrics()

    def get(self, *query: *KTs) -> VT | None:
        with self._lock:
            hit = self._cache.get(query)
            if hit is None:
                self._metrics.record_miss()
                return None
            self._metrics.record_hit()
            return hit

    def set(self, value: VT, *query: *KTs) -> VT:
        with self._lock:
            return self._cache.setdefault(query, value)

    def __contains__(self, query: tuple[*KTs]) -> bool:
        with self._lock:
            return query in self._cache

    def flush(self):
        with self._lock:
            self._cache = {}

    def get_metrics(self) -> CacheMetrics:
        """Return the metrics tracker for this cache."""
        return self._metrics

    def size(self) -> int:
        """Return current number of entries in cache."""
        with self._lock:
            return len(self._cache)


class MetadataCache:
    """Memoized metadata records, injected into the metadata client.

    Content configs are keyed by content id. Encryption configs are keyed by
    the (content id, bitrate) pair, so ("1", "23") and ("12", "3") stay
    distinct entries.
    """

    configs: SimpleCache["ContentConfig", str]
    encryption_configs: SimpleCache["ContentEncryptionConfig", str, str]

    def __init__(self):
        self.configs = SimpleCache()
        self.encryption_configs = SimpleCache()

    def get_config(self, content_id: str) -> "ContentConfig | None":
        return self.configs.get(content_id)

    def set_config(self, config: "ContentConfig", content_id: str) -> "ContentConfig":
        return self.configs.set(config, content_id)

    def get_encryption_config(
        self, content_id: str, bitrate: str
    ) -> "ContentEncryptionConfig | None":
        return self.encryption_configs.get(content_id, bitrate)

    def set_encryption_config(
        self, config: "ContentEncryptionConfig", content_id: str, bitrate: str
    ) -> "ContentEncryptionConfig":
        return self.encryption_configs.set(config, content_id, bitrate)

    def flush(self):
        self.configs.flush()
        self.encryption_configs.flush()
