from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStatistics:
    """Point-in-time snapshot of the authentication cache counters.

    A "load" is one invocation of the underlying authenticator.  Loads that
    return no principal or raise are counted as load failures; only successful
    loads produce a cache entry.

    Attributes:
        hit_count: Lookups answered from the cache
        miss_count: Lookups that found no usable entry
        load_success_count: Loads that returned a principal
        load_failure_count: Loads that returned None or raised
        total_load_time: Seconds spent inside the underlying authenticator
        eviction_count: Entries removed by the size or age policy (not by invalidation)
    """
    hit_count: int = 0
    miss_count: int = 0
    load_success_count: int = 0
    load_failure_count: int = 0
    total_load_time: float = 0.0
    eviction_count: int = 0

    def __post_init__(self) -> None:
        for field_name in ("hit_count", "miss_count", "load_success_count", "load_failure_count", "eviction_count"):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must not be negative")
        if self.total_load_time < 0:
            raise ValueError("total_load_time must not be negative")

    @property
    def request_count(self) -> int:
        return self.hit_count + self.miss_count

    @property
    def load_count(self) -> int:
        return self.load_success_count + self.load_failure_count

    @property
    def hit_rate(self) -> float:
        """Ratio of hits to requests, 1.0 when there were no requests."""
        requests: int = self.request_count
        return 1.0 if requests == 0 else self.hit_count / requests

    @property
    def miss_rate(self) -> float:
        requests: int = self.request_count
        return 0.0 if requests == 0 else self.miss_count / requests

    @property
    def load_failure_rate(self) -> float:
        loads: int = self.load_count
        return 0.0 if loads == 0 else self.load_failure_count / loads

    @property
    def average_load_penalty(self) -> float:
        """Average seconds spent per load."""
        loads: int = self.load_count
        return 0.0 if loads == 0 else self.total_load_time / loads

    def plus(self, other: "CacheStatistics") -> "CacheStatistics":
        return CacheStatistics(
            hit_count=self.hit_count + other.hit_count,
            miss_count=self.miss_count + other.miss_count,
            load_success_count=self.load_success_count + other.load_success_count,
            load_failure_count=self.load_failure_count + other.load_failure_count,
            total_load_time=self.total_load_time + other.total_load_time,
            eviction_count=self.eviction_count + other.eviction_count,
        )

    def minus(self, other: "CacheStatistics") -> "CacheStatistics":
        """Difference between two snapshots, floored at zero."""
        return CacheStatistics(
            hit_count=max(0, self.hit_count - other.hit_count),
            miss_count=max(0, self.miss_count - other.miss_count),
            load_success_count=max(0, self.load_success_count - other.load_success_count),
            load_failure_count=max(0, self.load_failure_count - other.load_failure_count),
            total_load_time=max(0.0, self.total_load_time - other.total_load_time),
            eviction_count=max(0, self.eviction_count - other.eviction_count),
        )
