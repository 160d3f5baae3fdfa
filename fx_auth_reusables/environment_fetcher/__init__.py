from .interfaces import IEnvironmentFetcher
from .concrete_dotenv import EnvironmentFetcher
from .concrete_empty import EmptyEnvironmentFetcher

__all__ = [
    "IEnvironmentFetcher",
    "EnvironmentFetcher",
    "EmptyEnvironmentFetcher"
]
