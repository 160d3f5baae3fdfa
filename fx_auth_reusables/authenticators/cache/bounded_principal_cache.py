import logging
import math
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, List, NamedTuple, Optional, Tuple, TypeVar

from cachetools import TLRUCache

from fx_auth_reusables.authenticators.domain.cache_statistics import CacheStatistics
from fx_auth_reusables.authenticators.domain.caching_authenticator_settings import CachingAuthenticatorSettings

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _CacheEntry(NamedTuple):
    value: Any
    written_at: float


class _InFlightLoad:
    """One running load for a key; waiters block on the future."""

    def __init__(self) -> None:
        self.future: Future = Future()
        self.discarded: bool = False


class _EvictionNotifyingCache(TLRUCache):
    """TLRUCache that reports every capacity or expiry removal."""

    def __init__(self, maxsize, ttu, timer, on_eviction: Callable[[Any, Any], None]):
        super().__init__(maxsize, ttu, timer)
        self._on_eviction = on_eviction

    def popitem(self):
        key, value = super().popitem()
        self._on_eviction(key, value)
        return key, value

    def expire(self, time=None):
        expired = super().expire(time)
        for key, value in expired:
            self._on_eviction(key, value)
        return expired


class BoundedPrincipalCache(Generic[K, V]):
    """Thread-safe bounded cache with get-or-load semantics and statistics.

    Entries are bounded by count (least recently used goes first), by age since
    write and by idle time since last read, as configured by
    CachingAuthenticatorSettings.  Expired entries are purged opportunistically:
    on insert, on size(), on clean_up() and when an expired key is looked up.

    get_or_load() runs at most one loader per key at a time.  Concurrent callers
    for the same key wait for that load and receive its value, or the very
    exception it raised.  A loader result of None is returned but never stored.

    A single lock guards the entries, the counters and the in-flight registry.
    It is never held while a loader or an invalidation predicate runs.  Hits take
    it too, since an LRU or idle-expiry touch reorders entries, so concurrent hits
    serialize briefly on O(1) work.
    """

    def __init__(
        self,
        settings: Optional[CachingAuthenticatorSettings] = None,
        timer: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings: CachingAuthenticatorSettings = settings or CachingAuthenticatorSettings()
        self._timer: Callable[[], float] = timer
        self._logger: logging.Logger = logger or logging.getLogger(self.__class__.__name__)
        self._lock: threading.Lock = threading.Lock()
        self._in_flight: Dict[K, _InFlightLoad] = {}

        self._hit_count: int = 0
        self._miss_count: int = 0
        self._load_success_count: int = 0
        self._load_failure_count: int = 0
        self._total_load_time: float = 0.0
        self._eviction_count: int = 0

        self._store: _EvictionNotifyingCache = self._new_store()

    @property
    def settings(self) -> CachingAuthenticatorSettings:
        return self._settings

    def get_if_present(self, key: K) -> Optional[V]:
        """Return the cached value for key, or None.  Counts as a hit or a miss."""
        with self._lock:
            entry: Optional[_CacheEntry] = self._lookup(key)
            if entry is None:
                self._miss_count += 1
                return None
            self._hit_count += 1
            return entry.value

    def get_or_load(self, key: K, loader: Callable[[K], Optional[V]]) -> Optional[V]:
        """Return the cached value for key, computing it with loader on a miss.

        Raises:
            Whatever loader raised, unchanged
        """
        with self._lock:
            entry: Optional[_CacheEntry] = self._lookup(key)
            if entry is not None:
                self._hit_count += 1
                return entry.value

            self._miss_count += 1
            in_flight: Optional[_InFlightLoad] = self._in_flight.get(key)
            if in_flight is None:
                in_flight = _InFlightLoad()
                self._in_flight[key] = in_flight
                is_owner: bool = True
            else:
                is_owner = False

        if not is_owner:
            self._logger.debug("Waiting for an in-flight load of the same key")
            return in_flight.future.result()

        return self._load(key, loader, in_flight)

    def invalidate(self, key: K) -> None:
        with self._lock:
            self._discard_in_flight(key)
            self._store.pop(key, None)

    def invalidate_many(self, keys: Iterable[K]) -> None:
        with self._lock:
            for key in keys:
                self._discard_in_flight(key)
                self._store.pop(key, None)

    def invalidate_matching(self, predicate: Callable[[K], bool]) -> int:
        """Remove every entry whose key satisfies predicate.

        Keys are snapshotted first, then filtered outside the lock, then removed.
        Entries stored while the predicate runs may or may not be removed.

        Returns:
            The number of keys that matched
        """
        with self._lock:
            self._store.expire()
            candidates: List[K] = list(self._store.keys())
            candidates.extend(key for key in self._in_flight if key not in self._store)

        matching: List[K] = [key for key in candidates if predicate(key)]
        self.invalidate_many(matching)
        return len(matching)

    def invalidate_all(self) -> None:
        with self._lock:
            for in_flight in self._in_flight.values():
                in_flight.discarded = True
            self._store = self._new_store()

    def size(self) -> int:
        """Number of resident, unexpired entries."""
        with self._lock:
            self._store.expire()
            return len(self._store)

    def keys(self) -> Tuple[K, ...]:
        with self._lock:
            self._store.expire()
            return tuple(self._store.keys())

    def clean_up(self) -> None:
        """Purge expired entries now."""
        with self._lock:
            self._store.expire()

    def stats(self) -> CacheStatistics:
        with self._lock:
            return CacheStatistics(
                hit_count=self._hit_count,
                miss_count=self._miss_count,
                load_success_count=self._load_success_count,
                load_failure_count=self._load_failure_count,
                total_load_time=self._total_load_time,
                eviction_count=self._eviction_count,
            )

    def _load(self, key: K, loader: Callable[[K], Optional[V]], in_flight: _InFlightLoad) -> Optional[V]:
        started: float = time.perf_counter()
        try:
            value: Optional[V] = loader(key)
        except BaseException as ex:
            with self._lock:
                self._finish_load(key, in_flight, succeeded=False, elapsed=time.perf_counter() - started)
            in_flight.future.set_exception(ex)
            raise

        with self._lock:
            self._finish_load(key, in_flight, succeeded=value is not None, elapsed=time.perf_counter() - started)
            if value is None:
                self._logger.debug("Load produced no value, nothing cached")
            elif in_flight.discarded:
                self._logger.debug("Key was invalidated while loading, result not cached")
            else:
                self._put(key, value)
        in_flight.future.set_result(value)
        return value

    def _finish_load(self, key: K, in_flight: _InFlightLoad, succeeded: bool, elapsed: float) -> None:
        if succeeded:
            self._load_success_count += 1
        else:
            self._load_failure_count += 1
        self._total_load_time += elapsed
        if self._in_flight.get(key) is in_flight:
            del self._in_flight[key]

    def _lookup(self, key: K) -> Optional[_CacheEntry]:
        entry: Optional[_CacheEntry] = self._store.get(key)
        if entry is not None and self._settings.expire_after_access is not None:
            # re-inserting recomputes the idle deadline; written_at is kept
            self._store[key] = entry
        return entry

    def _put(self, key: K, value: V) -> None:
        if self._admits_nothing():
            self._on_eviction(key, value)
            return
        self._store[key] = _CacheEntry(value=value, written_at=self._timer())

    def _admits_nothing(self) -> bool:
        return (
            self._settings.maximum_size == 0
            or self._settings.expire_after_write == 0
            or self._settings.expire_after_access == 0
        )

    def _discard_in_flight(self, key: K) -> None:
        in_flight: Optional[_InFlightLoad] = self._in_flight.get(key)
        if in_flight is not None:
            in_flight.discarded = True

    def _on_eviction(self, key: Any, value: Any) -> None:
        self._eviction_count += 1
        self._logger.debug("Entry evicted by cache policy (size=%s)", len(self._store))

    def _new_store(self) -> _EvictionNotifyingCache:
        maxsize: float = math.inf if self._settings.maximum_size is None else self._settings.maximum_size
        return _EvictionNotifyingCache(
            maxsize=maxsize,
            ttu=self._time_to_use,
            timer=self._timer,
            on_eviction=self._on_eviction,
        )

    def _time_to_use(self, key: Any, entry: _CacheEntry, now: float) -> float:
        expires: float = math.inf
        if self._settings.expire_after_write is not None:
            expires = min(expires, entry.written_at + self._settings.expire_after_write)
        if self._settings.expire_after_access is not None:
            expires = min(expires, now + self._settings.expire_after_access)
        return expires
