"""
Authentication module for reusables library.

Provides the pluggable authenticator interface and a caching decorator
that remembers successfully authenticated credentials.
"""

from .interfaces.authenticator_interface import IAuthenticator
from .exceptions.authentication_exception import AuthenticationException
from .domain.principal_impl import PrincipalImpl
from .domain.cache_statistics import CacheStatistics
from .domain.caching_authenticator_settings import CachingAuthenticatorSettings
from .cache_aside_decorators.caching_authenticator_cache_aside_decorator import CachingAuthenticatorCacheAsideDecorator

__all__ = [
    "IAuthenticator",
    "AuthenticationException",
    "PrincipalImpl",
    "CacheStatistics",
    "CachingAuthenticatorSettings",
    "CachingAuthenticatorCacheAsideDecorator"
]
