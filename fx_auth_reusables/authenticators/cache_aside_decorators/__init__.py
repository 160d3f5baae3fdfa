"""
Cache-aside decorators for authenticators.
"""

from .caching_authenticator_cache_aside_decorator import CachingAuthenticatorCacheAsideDecorator

__all__ = [
    "CachingAuthenticatorCacheAsideDecorator"
]
