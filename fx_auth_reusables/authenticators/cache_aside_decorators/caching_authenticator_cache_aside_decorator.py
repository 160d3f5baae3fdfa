import logging
import time
from typing import Callable, Iterable, Optional, Tuple, Union

from fx_auth_reusables.authenticators.cache.bounded_principal_cache import BoundedPrincipalCache
from fx_auth_reusables.authenticators.domain.cache_statistics import CacheStatistics
from fx_auth_reusables.authenticators.domain.caching_authenticator_settings import CachingAuthenticatorSettings
from fx_auth_reusables.authenticators.interfaces.authenticator_interface import C, IAuthenticator, P


class CachingAuthenticatorCacheAsideDecorator(IAuthenticator[C, P]):
    """Cache Aside Decorator for IAuthenticator.

    Principals returned by the inner authenticator are cached by credentials,
    so repeated requests with the same credentials skip the (possibly slow or
    rate-limited) inner check.

    Only successful results are cached:
    - a None result is returned but not cached, the next call asks the inner authenticator again
    - an AuthenticationException (or any other exception) is re-raised as-is and not cached

    The cache is bounded by the CachingAuthenticatorSettings given at construction
    (maximum size, expire after write, expire after access).  Concurrent misses on
    the same credentials share a single inner call.

    The cache is invalidated when:
    1. The size or age policy evicts an entry
    2. invalidate / invalidate_all / invalidate_all_matching / invalidate_many is called
    """

    def __init__(
        self,
        inner_item_to_decorate: IAuthenticator[C, P],
        settings: Optional[CachingAuthenticatorSettings] = None,
        timer: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the cache-aside decorator.

        Args:
            inner_item_to_decorate: The underlying IAuthenticator implementation to decorate
            settings: Cache policy.  If None, the cache is unbounded.
            timer: Clock used for expiry, in seconds
            logger: Optional logger
        """
        self._inner_item_to_decorate: IAuthenticator[C, P] = inner_item_to_decorate
        self._logger: logging.Logger = logger or logging.getLogger(self.__class__.__name__)
        self._cache: BoundedPrincipalCache[C, P] = BoundedPrincipalCache(settings, timer=timer, logger=self._logger)
        self._logger.info(
            "CachingAuthenticatorCacheAsideDecorator created (policy=\"%s\")",
            self._cache.settings.to_policy_string(),
        )

    @classmethod
    def from_policy(cls, inner_item_to_decorate: IAuthenticator[C, P], policy: str) -> "CachingAuthenticatorCacheAsideDecorator[C, P]":
        """Build the decorator from a policy string such as "maximumSize=1000,expireAfterAccess=10m"."""
        instance: CachingAuthenticatorCacheAsideDecorator[C, P] = cls(
            inner_item_to_decorate, CachingAuthenticatorSettings.parse(policy)
        )
        return instance

    def authenticate(self, credentials: C) -> Optional[P]:
        return self._cache.get_or_load(credentials, self._load_principal)

    def _load_principal(self, credentials: C) -> Optional[P]:
        self._logger.debug("Authentication cache miss, calling inner_item_to_decorate")
        principal: Optional[P] = self._inner_item_to_decorate.authenticate(credentials)
        if principal is None:
            self._logger.info("inner_item_to_decorate returned no principal, nothing cached")
        return principal

    def invalidate(self, credentials: C) -> None:
        """Discards any cached principal for the given credentials."""
        self._cache.invalidate(credentials)

    def invalidate_many(self, credentials: Iterable[C]) -> None:
        """Discards any cached principals for the given collection of credentials."""
        self._cache.invalidate_many(credentials)

    def invalidate_all_matching(self, predicate: Callable[[C], bool]) -> None:
        """Discards any cached principals whose credentials satisfy the predicate.

        The predicate sees the credentials cached at call time; entries cached
        while it runs may or may not be discarded.
        """
        removed: int = self._cache.invalidate_matching(predicate)
        self._logger.info("Invalidated %s cached principal(s) matching predicate", removed)

    def invalidate_all(self, credentials: Union[None, Iterable[C], Callable[[C], bool]] = None) -> None:
        """Discards cached principals.

        Args:
            credentials: None to discard everything, a predicate over credentials,
                         or a collection of credentials
        """
        if credentials is None:
            self._logger.info("Invalidating all cached principals")
            self._cache.invalidate_all()
        elif callable(credentials):
            self.invalidate_all_matching(credentials)
        elif isinstance(credentials, (str, bytes)):
            raise TypeError("invalidate_all expects a collection of credentials; use invalidate() for a single one")
        else:
            self.invalidate_many(credentials)

    def size(self) -> int:
        """Returns the number of cached principals."""
        return self._cache.size()

    def stats(self) -> CacheStatistics:
        """Returns a snapshot of the cache statistics."""
        return self._cache.stats()

    def cached_credentials(self) -> Tuple[C, ...]:
        return self._cache.keys()

    def clean_up(self) -> None:
        self._cache.clean_up()
