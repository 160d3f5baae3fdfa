from .principal_impl import PrincipalImpl
from .cache_statistics import CacheStatistics
from .caching_authenticator_settings import CachingAuthenticatorSettings

__all__ = [
    "PrincipalImpl",
    "CacheStatistics",
    "CachingAuthenticatorSettings"
]
