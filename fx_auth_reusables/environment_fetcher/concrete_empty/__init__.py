from .empty_environment_fetcher import EmptyEnvironmentFetcher

__all__ = [
    "EmptyEnvironmentFetcher"
]
