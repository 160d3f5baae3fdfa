from .environment_fetcher import EnvironmentFetcher

__all__ = [
    "EnvironmentFetcher"
]
